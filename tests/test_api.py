from conftest import ScriptedWords
from pwomatic.spweb.api import create_app

def client_for(words, batch_size=12):
    app = create_app(words, batch_size=batch_size)
    app.config["TESTING"] = True
    return app.test_client()

def test_home_renders_empty_tiles(words):
    resp = client_for(words, batch_size=6).get("/")
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert body.count('class="pwd"') == 6
    assert 'data-mode="readability"' in body
    assert 'data-mode="random"' in body
    assert "/api/passwords" in body

def test_api_defaults_to_normal(words):
    resp = client_for(words).get("/api/passwords")
    assert resp.status_code == 200
    data = resp.get_json()
    assert len(data["pwds"]) == 12
    assert data["fallback"] is False
    for pw in data["pwds"]:
        assert 20 <= len(pw) <= 27

def test_api_random_mode(words):
    data = client_for(words, batch_size=4).get("/api/passwords?mode=random").get_json()
    assert len(data["pwds"]) == 4
    assert len(set(data["pwds"])) == 4

def test_api_reports_fallback():
    supplier = ScriptedWords(["abcdefghij"] * 3000 + ["cat", "dog"])
    data = client_for(supplier, batch_size=1).get("/api/passwords?mode=readability").get_json()
    assert data["fallback"] is True
    assert data["pwds"][0][1:4] == "cat"

def test_api_generation_error_is_500():
    resp = client_for(ScriptedWords(["abcdefghijkl"]), batch_size=2).get("/api/passwords")
    assert resp.status_code == 500
    assert resp.get_data(as_text=True).startswith("Could not generate password:")

def test_generate_single(words):
    resp = client_for(words).post("/generate", json={"mode": "readability"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["fallback"] is False
    assert len(data["password"]) <= 27

def test_generate_without_body(words):
    resp = client_for(words).post("/generate")
    assert resp.status_code == 200
    assert 20 <= len(resp.get_json()["password"]) <= 27

def test_generate_non_object_body_means_normal():
    client = client_for(ScriptedWords(["cat", "dog"]))
    for body in (["random"], "random", 7, None):
        resp = client.post("/generate", json=body)
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["fallback"] is False
        assert data["password"][1:4] == "cat"

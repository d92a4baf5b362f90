import os
import json

def ensure_dir_exists(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)

def atomic_write_bytes(path: str, data: bytes, mode: int = 0o644) -> None:
    """
    Atomically write bytes to 'path' by writing to a temp file and renaming.
    The file gets permission bits `mode` before it becomes visible.
    """
    ensure_dir_exists(path)
    tmp = path + ".tmp"
    fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    os.chmod(tmp, mode)
    # atomic replace
    os.replace(tmp, path)

def dump_json_bytes(obj: dict) -> bytes:
    return json.dumps(obj, ensure_ascii=False, indent=2).encode("utf-8")

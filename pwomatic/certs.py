"""
pwomatic.certs
Self-signed TLS certificate for serving the generator over HTTPS on localhost.
Browsers only allow clipboard access from secure origins, so the page is
served over TLS even locally.
"""

import datetime
import os

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID
from loguru import logger

from .errors import CertificateError
from .storage import atomic_write_bytes

KEY_SIZE = 2048
VALID_DAYS = 365
COMMON_NAME = "localhost"


def _build_certificate(key: rsa.RSAPrivateKey) -> x509.Certificate:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, COMMON_NAME)])
    not_before = datetime.datetime.now(datetime.timezone.utc)
    not_after = not_before + datetime.timedelta(days=VALID_DAYS)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before)
        .not_valid_after(not_after)
        .add_extension(x509.BasicConstraints(ca=False, path_length=None), critical=True)
        .add_extension(
            x509.KeyUsage(
                digital_signature=True,
                content_commitment=False,
                key_encipherment=True,
                data_encipherment=False,
                key_agreement=False,
                key_cert_sign=False,
                crl_sign=False,
                encipher_only=False,
                decipher_only=False,
            ),
            critical=True,
        )
        .add_extension(x509.ExtendedKeyUsage([ExtendedKeyUsageOID.SERVER_AUTH]), critical=False)
        .add_extension(x509.SubjectAlternativeName([x509.DNSName(COMMON_NAME)]), critical=False)
        .sign(key, hashes.SHA256())
    )


def ensure_self_signed_cert(cert_path: str, key_path: str) -> bool:
    """
    Create `cert_path` and `key_path` unless both already exist.
    Returns True if a new certificate was written.
    """
    if os.path.exists(cert_path) and os.path.exists(key_path):
        return False

    logger.info("Generating new self-signed cert for {}", COMMON_NAME)
    try:
        key = rsa.generate_private_key(public_exponent=65537, key_size=KEY_SIZE)
        cert = _build_certificate(key)
        cert_pem = cert.public_bytes(serialization.Encoding.PEM)
        key_pem = key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
    except ValueError as e:
        raise CertificateError(f"create certificate: {e}") from e

    try:
        atomic_write_bytes(cert_path, cert_pem, mode=0o644)
        atomic_write_bytes(key_path, key_pem, mode=0o600)
    except OSError as e:
        raise CertificateError(f"write certificate files: {e}") from e
    logger.info("Wrote certificate {} and key {}", cert_path, key_path)
    return True

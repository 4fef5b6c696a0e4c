from nacl.hash import sha256
from nacl.encoding import HexEncoder


def sha256_hex(data: bytes) -> str:
    return sha256(data, encoder=HexEncoder).decode()

import string
import secrets

CODE_PREFIX = "NIKAH-"


def generate_invitation_code(length: int = 6) -> str:
    """Function is generate a shareable invitation code like NIKAH-7F3A9C"""
    characters = string.ascii_uppercase + string.digits
    return CODE_PREFIX + "".join(secrets.choice(characters) for _ in range(length))


def normalize_invitation_code(code: str) -> str:
    code = code.strip().upper()
    if not code.startswith(CODE_PREFIX):
        code = CODE_PREFIX + code
    return code

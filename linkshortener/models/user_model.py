from dataclasses import dataclass


# fmt: off
@dataclass(frozen=True)
class UserModel:
    login: str                          # Unique login name
    password_hash: str                  # Lowercase hex SHA-256 of the password
    token: str                          # Session token, assigned once at registration
    owned_codes: tuple[str, ...] = ()   # Short codes created by this user, in creation order
# fmt: on

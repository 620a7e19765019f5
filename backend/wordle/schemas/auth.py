from pydantic import BaseModel, field_validator


def _trim(v):
    if v is None:
        return None
    return str(v).strip()


class RegisterIn(BaseModel):
    # optional here so a missing field gets the same message as an empty one
    username: str | None = None
    email: str | None = None
    password: str | None = None

    @field_validator("username")
    @classmethod
    def username_trim(cls, v: str | None):
        v = _trim(v)
        if v and len(v) > 50:
            raise ValueError("username too long")
        return v

    @field_validator("email")
    @classmethod
    def email_normalize(cls, v: str | None):
        v = _trim(v)
        if v and len(v) > 100:
            raise ValueError("email too long")
        return v.lower() if v else v


class LoginIn(BaseModel):
    email: str | None = None
    password: str | None = None

    @field_validator("email")
    @classmethod
    def email_normalize(cls, v: str | None):
        v = _trim(v)
        return v.lower() if v else v

from pydantic import BaseModel, Field, field_validator
import re

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
# bcrypt only hashes the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: str
    password: str = Field(..., min_length=6)

    @field_validator('email')
    @classmethod
    def normalise_email(cls, value):
        value = value.strip().lower()
        if not EMAIL_PATTERN.match(value):
            raise ValueError('Please enter a valid email')
        return value

    @field_validator('password')
    @classmethod
    def check_password_length(cls, value):
        if len(value.encode('utf-8')) > MAX_PASSWORD_BYTES:
            raise ValueError(f'Password must be at most {MAX_PASSWORD_BYTES} bytes')
        return value


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def normalise_email(cls, value):
        return value.strip().lower()

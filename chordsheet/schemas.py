from pydantic import BaseModel, field_validator

from chordsheet.keys import parse_key


class Song(BaseModel):
    title: str
    artist: str = ""
    original_key: str = "C"
    lyrics: str = ""

    @field_validator("original_key")
    @classmethod
    def _canonical_key(cls, value: str) -> str:
        # UnknownKeyError is a ValueError, which pydantic reports as a validation error.
        return parse_key(value).name

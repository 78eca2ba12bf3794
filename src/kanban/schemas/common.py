"""Validators shared by request schemas."""


def strip_required(v: str, field: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{field} cannot be empty or whitespace only")
    return v


def strip_optional(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v

PROFANE_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"


def clean_body(body: str) -> str:
    """Mask profane words. Words are split on single spaces and matched
    case-insensitively; punctuation attached to a word prevents a match."""
    words = body.split(" ")
    return " ".join(MASK if word.lower() in PROFANE_WORDS else word for word in words)

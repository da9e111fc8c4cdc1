def extract_bearer_token(authorization: str | None) -> str:
    """Strip the ``Bearer `` prefix from an Authorization header value.

    Returns an empty string when the header is absent. A header without the
    prefix is taken as the raw token.
    """
    return (authorization or "").replace("Bearer ", "", 1)

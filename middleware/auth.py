from fastapi import Request, HTTPException, status


async def verify_jwt_middleware(request: Request):
    """
    Verify the bearer token in the Authorization header

    Does nothing when the application runs with auth disabled.

    Args:
        request: FastAPI request object

    Raises:
        HTTPException: If token is missing, invalid, or expired
    """
    jwt_service = request.app.state.jwt_service
    if jwt_service is None:
        return

    auth_header = request.headers.get("Authorization")

    if not auth_header:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Authorization header format. Expected: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = parts[1]
    payload = jwt_service.verify_jwt(token)

    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

import uuid
from fastapi import APIRouter, Depends, Request, Response, status
from schemas import AuthResponse, LoginRequest, UserCreate, UserResponse
from middleware.auth import verify_jwt_middleware
from routes.responses import error_response
from services.user_service import UserService

router = APIRouter()


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    dependencies=[Depends(verify_jwt_middleware)],
)
def get_user(user_id: uuid.UUID, service: UserService = Depends(get_user_service)):
    """Get a user by id, or 404 with an empty body"""
    result = service.get_by_id(user_id)
    if not result.ok:
        return error_response(result.error)
    return UserResponse.model_validate(result.value)


@router.post("/users/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: UserCreate,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """
    Register a new user

    Returns:
        The created user, with a Location header pointing at it; 400 when the
        email is blank; 500 when the email is already registered
    """
    result = service.add(payload)
    if not result.ok:
        return error_response(result.error)

    user = result.value
    response.headers["Location"] = str(request.url_for("get_user", user_id=str(user.id)))
    return UserResponse.model_validate(user)


@router.post("/users/login", response_model=None)
def login(
    credentials: LoginRequest,
    request: Request,
    service: UserService = Depends(get_user_service),
):
    """
    Exchange credentials for a bearer token

    With auth disabled there is no token to issue and the user itself is returned.
    """
    result = service.login(credentials.email, credentials.password)
    if not result.ok:
        return error_response(result.error)

    user = result.value
    jwt_service = request.app.state.jwt_service
    if jwt_service is None:
        return UserResponse.model_validate(user)

    return AuthResponse(token=jwt_service.issue_token(user), user_id=user.id, email=user.email)

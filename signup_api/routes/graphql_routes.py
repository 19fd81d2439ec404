from typing import Annotated, Optional, Union

import strawberry
from fastapi import Depends, Request
from starlette.concurrency import run_in_threadpool
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from signup_api.auth.jwt_handler import TokenIssuer
from signup_api.core.config import Settings
from signup_api.services.registration import (
    STORE_UNAVAILABLE,
    Conflict,
    Created,
    RegistrationService,
)

HELLO_MESSAGE = "Hello world!"
TEST_MESSAGE = "I am world"
USER_EXISTS_MESSAGE = "User already there"

FAILURE_MESSAGES = {
    STORE_UNAVAILABLE: "Service temporarily unavailable",
}
DEFAULT_FAILURE_MESSAGE = "Internal server error"


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    username: str
    name: str
    password: Optional[str] = strawberry.field(
        default=None,
        description="Password hash. Null unless EXPOSE_PASSWORD_HASH is enabled.",
    )


@strawberry.type
class UserCreated:
    user: UserType
    token: str


@strawberry.type
class UserAlreadyExists:
    username: str
    message: str = USER_EXISTS_MESSAGE


@strawberry.type
class CreateUserFailed:
    code: str
    message: str


CreateUserResult = Annotated[
    Union[UserCreated, UserAlreadyExists, CreateUserFailed],
    strawberry.union("CreateUserResult"),
]


@strawberry.type
class Query:
    @strawberry.field
    def hello(self) -> str:
        return HELLO_MESSAGE

    @strawberry.field
    def test(self) -> str:
        return TEST_MESSAGE


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_user(
        self,
        info: Info,
        username: str,
        name: str,
        password: str,
    ) -> CreateUserResult:
        service: RegistrationService = info.context["registration"]
        result = await run_in_threadpool(service.create_user, username, name, password)

        if isinstance(result, Created):
            expose = info.context.get("expose_password_hash", False)
            return UserCreated(
                user=UserType(
                    id=strawberry.ID(str(result.user.id)),
                    username=result.user.username,
                    name=result.user.name,
                    password=result.user.password_hash if expose else None,
                ),
                token=result.token,
            )
        if isinstance(result, Conflict):
            return UserAlreadyExists(username=result.username)
        return CreateUserFailed(
            code=result.reason.upper(),
            message=FAILURE_MESSAGES.get(result.reason, DEFAULT_FAILURE_MESSAGE),
        )


schema = strawberry.Schema(query=Query, mutation=Mutation)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registration_service(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> RegistrationService:
    return RegistrationService(
        session_factory=request.app.state.session_factory,
        token_issuer=TokenIssuer.from_settings(settings),
        retry_attempts=settings.db_retry_attempts,
        retry_backoff_seconds=settings.db_retry_backoff_seconds,
    )


async def get_context(
    registration: RegistrationService = Depends(get_registration_service),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    return {
        "registration": registration,
        "expose_password_hash": settings.expose_password_hash,
    }


def build_graphql_router(settings: Settings) -> GraphQLRouter:
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.graphiql_enabled else None,
    )

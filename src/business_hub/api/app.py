"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from business_hub.api.models import LoginForm, RegisterForm, SubscriptionUpdateBody
from business_hub.api.resources import router as resources_router
from business_hub.api.visitors import (
    SESSION_COOKIE,
    issue_visitor_key,
    require_visitor,
    revoke_visitor_key,
)
from business_hub.app_logging import configure_logging
from business_hub.containers import AppContainer
from business_hub.domain.errors import (
    ApiError,
    ApiRequestError,
    SessionExpiredError,
    ValidationError,
)
from business_hub.domain.session import SessionExpired
from business_hub.services.formatting import (
    format_currency,
    format_date,
    limit_label,
    subscription_status_style,
)
from business_hub.services.notices import Notice, failure_notice
from business_hub.services.plans import is_popular, plan_tier
from business_hub.services.subscriptions import (
    SubscriptionListing,
    days_remaining,
    period_progress,
    plan_name,
)

DASHBOARD_PATH = "/dashboard"
VISITOR_ONLY = [Depends(require_visitor)]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    login_path = container.settings.login_path

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.state.visitor_key = None

    def on_session_expired(event: SessionExpired) -> None:
        logger.warning(
            "Session expired during %s %s; redirecting to %s",
            event.method,
            event.path,
            login_path,
        )
        revoke_visitor_key(app)

    container.api_client.on_session_expired(on_session_expired)

    app.include_router(resources_router)

    @app.exception_handler(SessionExpiredError)
    async def session_expired(
        request: Request, exc: SessionExpiredError
    ) -> RedirectResponse:
        return RedirectResponse(login_path, status_code=status.HTTP_303_SEE_OTHER)

    @app.exception_handler(ValidationError)
    async def invalid_form(request: Request, exc: ValidationError) -> JSONResponse:
        notice = Notice("Invalid order", str(exc), variant="destructive")
        return JSONResponse(
            {"notice": asdict(notice)},
            status_code=422,
        )

    @app.exception_handler(ApiError)
    async def api_error(request: Request, exc: ApiError) -> JSONResponse:
        notice = failure_notice("Error", exc, "Request failed")
        status_code = (
            exc.status_code
            if isinstance(exc, ApiRequestError)
            else status.HTTP_502_BAD_GATEWAY
        )
        return JSONResponse({"notice": asdict(notice)}, status_code=status_code)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/")
    async def landing() -> dict[str, object]:
        """Entry page with links to sign in or register."""
        return {
            "name": "BusinessHub",
            "links": {"login": login_path, "register": "/register"},
        }

    @app.get("/login")
    async def login_page(request: Request) -> dict[str, object]:
        """Login entry point."""
        state_container: AppContainer = request.app.state.container
        return {
            "page": "login",
            "authenticated": state_container.auth_service.is_authenticated(),
        }

    @app.post("/login", response_model=None)
    async def login(
        form: LoginForm, request: Request
    ) -> RedirectResponse | JSONResponse:
        """Authenticate, store the session and continue to the dashboard."""
        state_container: AppContainer = request.app.state.container
        try:
            await state_container.auth_service.login(form.email, form.password)
        except ApiError as exc:
            notice = failure_notice("Login failed", exc, "Invalid email or password")
            return JSONResponse(
                {"notice": asdict(notice)},
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        response = RedirectResponse(
            DASHBOARD_PATH, status_code=status.HTTP_303_SEE_OTHER
        )
        response.set_cookie(
            SESSION_COOKIE,
            issue_visitor_key(request.app),
            httponly=True,
            samesite="lax",
        )
        return response

    @app.post("/register", response_model=None)
    async def register(
        form: RegisterForm, request: Request
    ) -> dict[str, object] | JSONResponse:
        """Register a business account."""
        state_container: AppContainer = request.app.state.container
        try:
            await state_container.auth_service.register(
                form.business_name, form.email, form.password
            )
        except ApiError as exc:
            notice = failure_notice("Registration failed", exc, "Please try again")
            return JSONResponse(
                {"notice": asdict(notice)},
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        return {"registered": True, "next": login_path}

    @app.post("/logout", dependencies=VISITOR_ONLY)
    async def logout(request: Request) -> RedirectResponse:
        """Forget the session and return to the login page."""
        state_container: AppContainer = request.app.state.container
        state_container.auth_service.logout()
        revoke_visitor_key(request.app)
        response = RedirectResponse(login_path, status_code=status.HTTP_303_SEE_OTHER)
        response.delete_cookie(SESSION_COOKIE)
        return response

    @app.get(DASHBOARD_PATH, dependencies=VISITOR_ONLY)
    async def dashboard(request: Request) -> dict[str, object]:
        """Aggregate metrics for the dashboard page."""
        state_container: AppContainer = request.app.state.container
        page = await state_container.dashboard_service.load(
            state_container.auth_service.business_name()
        )
        return asdict(page)

    @app.get("/plans", dependencies=VISITOR_ONLY)
    async def plans(request: Request) -> dict[str, object]:
        """Plan catalogue for plan selection."""
        state_container: AppContainer = request.app.state.container
        catalogue = await state_container.plan_service.load()
        return {
            "plans": [
                {
                    **asdict(plan),
                    "price_display": format_currency(plan.price),
                    "tier": plan_tier(plan.name),
                    "popular": is_popular(plan.name),
                }
                for plan in catalogue.plans
            ],
            "notice": _notice(catalogue.notice),
        }

    @app.post(
        "/plans/{plan_id}/select", response_model=None, dependencies=VISITOR_ONLY
    )
    async def select_plan(
        plan_id: str, request: Request
    ) -> RedirectResponse | JSONResponse:
        """Subscribe to a plan and continue to the dashboard."""
        state_container: AppContainer = request.app.state.container
        selection = await state_container.plan_service.select(plan_id)
        if selection.activated:
            return RedirectResponse(
                DASHBOARD_PATH, status_code=status.HTTP_303_SEE_OTHER
            )
        return JSONResponse(
            {"notice": asdict(selection.notice)},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.get("/subscriptions", dependencies=VISITOR_ONLY)
    async def subscriptions(request: Request) -> dict[str, object]:
        """Current plan and subscription history."""
        state_container: AppContainer = request.app.state.container
        listing = await state_container.subscription_service.load()
        return _subscriptions_view(listing)

    @app.put("/subscriptions/{subscription_id}", dependencies=VISITOR_ONLY)
    async def update_subscription(
        subscription_id: str, body: SubscriptionUpdateBody, request: Request
    ) -> dict[str, object]:
        """Update a subscription and return the refreshed page."""
        state_container: AppContainer = request.app.state.container
        listing = await state_container.subscription_service.update(
            subscription_id, body.to_changes()
        )
        return _subscriptions_view(listing)

    return app


def _notice(notice: Notice | None) -> dict[str, str] | None:
    return asdict(notice) if notice else None


def _subscriptions_view(listing: SubscriptionListing) -> dict[str, object]:
    active = []
    for subscription in listing.active:
        plan = subscription.plan.entity
        days_left = (
            days_remaining(subscription.end_date) if subscription.end_date else None
        )
        active.append(
            {
                "id": subscription.id,
                "plan": plan_name(subscription, default="Current Plan"),
                "price": format_currency(plan.price if plan else 0),
                "start_date": format_date(subscription.start_date, long=True),
                "end_date": format_date(subscription.end_date, long=True),
                "days_remaining": days_left,
                "progress": period_progress(days_left) if days_left else None,
                "limits": (
                    {
                        "products": limit_label(plan.products_limit),
                        "customers": limit_label(plan.customers_limit),
                        "photos": limit_label(plan.photo_limit),
                    }
                    if plan
                    else None
                ),
            }
        )
    history = [
        {
            "id": subscription.id,
            "plan": plan_name(subscription),
            "status": subscription.status,
            "style": subscription_status_style(subscription.status),
            "start_date": format_date(subscription.start_date, long=True),
            "end_date": format_date(subscription.end_date, long=True),
            "price": format_currency(
                subscription.plan.entity.price if subscription.plan.entity else 0
            ),
        }
        for subscription in listing.subscriptions
    ]
    return {"active": active, "history": history, "notice": _notice(listing.notice)}

from fastapi import APIRouter
from rideseat.core.config import settings
from rideseat.api.v1.routes.public import router as public_router
from rideseat.api.v1.routes.trips import router as trips_router
from rideseat.api.v1.routes.bookings import router as bookings_router
from rideseat.api.v1.routes.tickets import router as tickets_router
from rideseat.api.v1.routes.disputes import router as disputes_router
from rideseat.api.v1.routes.ratings import router as ratings_router
from rideseat.api.v1.routes.notifications import router as notifications_router
from rideseat.api.v1.routes.driver import router as driver_router
from rideseat.api.v1.routes.audit import router as audit_router

api_router = APIRouter(prefix=settings.API_PREFIX)
api_router.include_router(public_router)
api_router.include_router(trips_router)
api_router.include_router(bookings_router)
api_router.include_router(tickets_router)
api_router.include_router(disputes_router)
api_router.include_router(ratings_router)
api_router.include_router(notifications_router)
api_router.include_router(driver_router)
api_router.include_router(audit_router)

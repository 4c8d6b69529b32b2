from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from rideseat.api.deps import Store, get_store
from rideseat.schemas.rating import RatingIn, RatingSummaryOut
from rideseat.services.hydrate import rating_out
from rideseat.services.rating_service import driver_rating_summary, rate_driver

router = APIRouter(tags=["ratings"])


@router.get("/ratings/driver/{driver_id}/summary", response_model=RatingSummaryOut)
def rating_summary(driver_id: str, store: Store = Depends(get_store)):
    return driver_rating_summary(store, driver_id)


@router.post("/ratings")
def create_rating(body: RatingIn, store: Store = Depends(get_store)):
    """201 for a first rating of the booking, 200 when it replaces an earlier one."""
    rating, created = rate_driver(store, body.bookingId, body.passengerId, body.score, body.comment)
    return JSONResponse(status_code=201 if created else 200, content=rating_out(rating))

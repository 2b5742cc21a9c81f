from fastapi import APIRouter

from self_olympics.schemas.country import CountryListResponse
from self_olympics.utils.countries import list_countries

router = APIRouter()


@router.get("/countries", response_model=CountryListResponse)
def get_countries():
    countries = list_countries()
    return CountryListResponse(countries=countries, total=len(countries))

from typing import List

from self_olympics.schemas.registration import CamelModel


class CountryResponse(CamelModel):
    country_code: str
    country_name: str


class CountryListResponse(CamelModel):
    success: bool = True
    countries: List[CountryResponse]
    total: int

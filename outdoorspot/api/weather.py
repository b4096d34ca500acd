"""Current weather for a location name."""
from fastapi import APIRouter, Depends, Query

from outdoorspot.dependencies import get_weather_service
from outdoorspot.models import Envelope, Weather
from outdoorspot.weather import WeatherService

router = APIRouter(prefix="/weather", tags=["Weather"])


@router.get("", response_model=Envelope[Weather])
async def get_weather(
    location: str = Query(..., min_length=1, description="Location name"),
    weather: WeatherService = Depends(get_weather_service),
):
    """Unknown names get a placeholder reading with condition `Unknown`."""
    return Envelope[Weather](data=await weather.lookup(location))

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from cars import CarService
from responses import Result, envelope

router = APIRouter(tags=["cars"])


def get_car_service(request: Request) -> CarService:
    state = request.app.state
    return CarService(state.database.collection, timeout=state.settings.request_timeout)


def render(result: Result) -> JSONResponse:
    return JSONResponse(status_code=result.status, content=envelope(result))


@router.post("/car")
async def create_car(request: Request, service: CarService = Depends(get_car_service)):
    body = await request.body()
    return render(await run_in_threadpool(service.create, body))


@router.get("/car/{car_id}")
def get_car(car_id: str, service: CarService = Depends(get_car_service)):
    return render(service.get(car_id))


@router.put("/car/{car_id}")
async def edit_car(car_id: str, request: Request, service: CarService = Depends(get_car_service)):
    body = await request.body()
    return render(await run_in_threadpool(service.update, car_id, body))


@router.delete("/car/{car_id}")
def delete_car(car_id: str, service: CarService = Depends(get_car_service)):
    return render(service.delete(car_id))


@router.get("/cars")
def list_cars(service: CarService = Depends(get_car_service)):
    return render(service.list_all())

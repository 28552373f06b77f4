# barbershop/main.py

from contextlib import asynccontextmanager

from fastapi import FastAPI

from barbershop.db import create_db_and_tables
from barbershop.routers import bookings_routes, schedule_routes, services_routes, users_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    yield


app = FastAPI(title="Barbershop Booking", lifespan=lifespan)

app.include_router(users_routes.router)
app.include_router(services_routes.router)
app.include_router(bookings_routes.router)
app.include_router(schedule_routes.router)


@app.get("/health")
def health_check():
    return {"status": "ok"}

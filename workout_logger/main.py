from fastapi import FastAPI

from .error_handlers import register_error_handlers
from .routes import home, workout

app = FastAPI(title="Workout Logger")

register_error_handlers(app)

app.include_router(home.router)
app.include_router(workout.router)

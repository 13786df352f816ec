import uvicorn
from fastapi import FastAPI
from fastapi.routing import APIRoute
from salesdesk.api.main import api_router
from salesdesk.core.config import settings
from salesdesk.core.logging import configure_logging
from starlette.middleware.cors import CORSMiddleware

def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


configure_logging()

app = FastAPI(
    root_path=settings.API_ROOT_PATH,
    title=settings.PROJECT_NAME,
    generate_unique_id_function=custom_generate_unique_id,
)
app.include_router(api_router)
app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def run() -> None:
    uvicorn.run(app, host=settings.SERVER_HOST, port=settings.SERVER_PORT)


if __name__ == "__main__":
    run()

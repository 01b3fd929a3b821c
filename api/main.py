import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import cleanup_dependencies, init_dependencies
from api.error_handlers import register_exception_handlers
from api.routes import health, rates
from config.logging_config import setup_logging
from config.settings import get_settings

logger = logging.getLogger(__name__)


settings = get_settings()
setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info(f'Starting {settings.APP_NAME}...')

	init_dependencies(settings)

	logger.info('Application ready')

	yield

	logger.info('Shutting down...')
	await cleanup_dependencies()


app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)

app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.CORS_ALLOW_ORIGINS,
	allow_methods=['GET', 'OPTIONS'],
	allow_headers=['Content-Type'],
)

app.include_router(rates.router)
app.include_router(health.router)
register_exception_handlers(app)


def main() -> None:
	import uvicorn

	logger.info(f'Server is listening on {settings.HOST}:{settings.PORT}')

	uvicorn.run(
		app,
		host=settings.HOST,
		port=settings.PORT,
		log_level=settings.LOG_LEVEL.lower(),
		log_config=None,
	)


if __name__ == '__main__':
	main()

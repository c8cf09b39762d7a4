"""REST interface (FastAPI). Run with `uvicorn --factory aac.web.app:create_app`."""

# Entry point: ensure tables, then serve the API with uvicorn.
import uvicorn
from decouple import config

from storefront.utils import logger

HOST = config("HOST", default="0.0.0.0")
PORT = config("PORT", cast=int, default=5000)

if __name__ == "__main__":
    logger.info(f"Starting storefront API on {HOST}:{PORT}")
    uvicorn.run("storefront.main:app", host=HOST, port=PORT)

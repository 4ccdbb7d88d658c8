import logging

import uvicorn
from fastapi import FastAPI

from offers.cart import router as cart_router
from offers.errors import register_error_handlers
from offers.quote import router as quote_router
from offers.settings import LOG_LEVEL, PORT

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

app = FastAPI(title="Offer Pricing Engine")

register_error_handlers(app)
app.include_router(quote_router, prefix="/offers", tags=["offers"])
app.include_router(cart_router, prefix="/cart", tags=["cart"])

@app.get("/")
async def root():
    return {"message": "Offer Pricing Engine API is running."}


if __name__ == "__main__":
    uvicorn.run("offers.main:app", host="0.0.0.0", port=PORT, log_level=LOG_LEVEL.lower())

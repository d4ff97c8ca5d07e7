from fastapi import APIRouter

from chalet_enquiry.api.routes import enquiry

api_router = APIRouter()

# 🔓 Public form endpoint (catch-all, so it is registered last)
api_router.include_router(enquiry.router)

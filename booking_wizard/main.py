"""
Main application entry point for the booking wizard.
"""

import uvicorn
from dotenv import load_dotenv

from .api.app import create_app

load_dotenv()

# Create the FastAPI application
app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "booking_wizard.main:app",
        host="0.0.0.0",
        port=8080,
        reload=True
    )

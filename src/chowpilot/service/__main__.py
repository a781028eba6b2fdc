"""Run the API with uvicorn."""
import os

import uvicorn


def main():
    uvicorn.run(
        "chowpilot.service.main:create_app",
        factory=True,
        host=os.getenv("CHOW_HOST", "0.0.0.0"),
        port=int(os.getenv("CHOW_PORT", "8000")),
    )


if __name__ == "__main__":
    main()

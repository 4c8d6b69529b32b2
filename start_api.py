#!/usr/bin/env python3
"""
Configure logging, then start uvicorn. Seeding happens in the app lifespan
(SEED_DATA=true), so a restart always begins from the seed data.
"""
import os

import uvicorn

from rideseat.core.logging import setup_logging

if __name__ == "__main__":
    setup_logging()
    uvicorn.run(
        "rideseat.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "3000")),
        log_config=None,
    )

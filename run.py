#!/usr/bin/env python3
"""
GTT Bank Entry Point

Starts the FastAPI server with a freshly seeded in-memory bank.
Balances live in process memory and are gone when the server stops.
"""

import sys

import uvicorn

from gtt_bank.api import create_app
from gtt_bank.config import get_config
from gtt_bank.logging_config import configure_logging


def main():
    config = get_config()
    configure_logging(config)
    app = create_app(config=config)

    print(f"🏦 Starting {config.bank_name}...")
    print(f"🌐 API available at: http://{config.api_host}:{config.api_port}")
    print(f"📚 Documentation at: http://{config.api_host}:{config.api_port}/docs")
    print()

    try:
        uvicorn.run(app, host=config.api_host, port=config.api_port, access_log=False)
    except KeyboardInterrupt:
        print(f"\n👋 Shutting down {config.bank_name}...")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

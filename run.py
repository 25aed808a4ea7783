#!/usr/bin/env python3
"""
Account Ledger Service Entry Point

Starts the FastAPI server with configuration taken from LEDGER_* environment
variables (or a .env file).
"""

import sys

from account_ledger.api import run_server
from account_ledger.config import get_config


if __name__ == "__main__":
    config = get_config()
    print("🏦 Starting Account Ledger Service...")
    print(f"🗄️  Database: {config.database_url.split('@')[-1]}")
    print(f"🌐 API available at: http://localhost:{config.api_port}")
    print(f"📚 Documentation at: http://localhost:{config.api_port}/docs")
    print()

    try:
        run_server(config=config)
    except KeyboardInterrupt:
        print("\n👋 Shutting down Account Ledger Service...")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)

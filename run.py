#!/usr/bin/env python3
"""
Account Ledger Entry Point

Starts the FastAPI server using host and port from LEDGER_* settings.
"""

import sys

from account_ledger.api import run_server


if __name__ == "__main__":
    try:
        run_server()
    except KeyboardInterrupt:
        print("\nShutting down Account Ledger...")
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)

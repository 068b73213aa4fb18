"""Pytest configuration and fixtures."""

import os

# Keep tests away from any real Cosmos DB account configured in the shell or .env
os.environ["COSMOS_ENDPOINT"] = ""
os.environ["COSMOS_EMULATOR"] = "false"

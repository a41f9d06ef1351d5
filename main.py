"""
Main entrypoint for the DevCamper API.

Usage:
    Run directly (`python main.py`) to create the database tables and serve the API with uvicorn.
    Configuration is read from the environment (see src/config.py).
"""
import uvicorn

from src import config
from src.db.database import create_tables


def main():
    """
    Main function to start the API server.
    """
    try:
        # Initialize database tables
        create_tables()

        print(f"Starting DevCamper API on port {config.PORT}...")
        uvicorn.run("src.api.app:app", host="0.0.0.0", port=config.PORT)
        return 0
    except Exception as e:
        print(f"An error occurred in the main function: {str(e)}")
        return 1


if __name__ == "__main__":
    exit_code = main()
    print(f"Exiting with code {exit_code}")

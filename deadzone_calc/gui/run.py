"""Launch script for the calculator API."""

import uvicorn


def main():
    """Start the API server."""
    print("=" * 70)
    print("Deadzone Damage Calculator API")
    print("=" * 70)
    print("\nStarting server...")
    print("POST combat scenarios to http://localhost:8000/api/calc")
    print("\nPress Ctrl+C to stop the server")
    print("=" * 70 + "\n")

    uvicorn.run(
        "deadzone_calc.gui.app:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level="info"
    )


if __name__ == "__main__":
    main()

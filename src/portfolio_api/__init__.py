def main() -> None:
    """Entry point for the application."""
    from portfolio_api.api.main import main as api_main

    api_main()

#!/usr/bin/env python3
"""
Course API - Startup Script
Run this file to start the server with the configured settings
"""

import sys
from pathlib import Path


def check_environment() -> bool:
    """Check if environment is properly set up"""
    print("🔍 Checking environment setup...")

    if not Path(".env").exists():
        print("ℹ️  No .env file found, using defaults (see .env.example)")

    try:
        import fastapi  # noqa: F401
        import sqlalchemy  # noqa: F401
        import uvicorn  # noqa: F401
    except ImportError as e:
        print(f"❌ ERROR: Missing dependency: {e}")
        print("\n📦 Install dependencies with:")
        print("   pip install -e .")
        return False

    print("✅ Environment check passed!")
    return True


def print_startup_info(host: str, port: int, docs_enabled: bool) -> None:
    """Print startup information"""
    base_url = f"http://{'localhost' if host == '0.0.0.0' else host}:{port}"
    print("\n🚀 Starting server...")
    print("\n📚 Once started, you can access:")
    if docs_enabled:
        print(f"   • API Docs (Swagger): {base_url}/docs")
        print(f"   • API Docs (ReDoc):   {base_url}/redoc")
    print(f"   • Health Check:       {base_url}/health")
    print("\n💡 Press CTRL+C to stop the server")
    print("\n" + "=" * 55 + "\n")


def main():
    """Main startup function"""
    if not check_environment():
        sys.exit(1)

    import uvicorn
    from courses_api.config import settings

    print_startup_info(settings.host, settings.port, settings.docs_enabled)

    try:
        uvicorn.run(
            "courses_api.main:app",
            host=settings.host,
            port=settings.port,
            reload=settings.debug,
            log_level=settings.LOG_LEVEL.lower(),
        )
    except KeyboardInterrupt:
        print("\n\n👋 Server stopped by user")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Simple script to start the clonability analysis API
"""
import sys
from pathlib import Path

# Make the clonability package and web_api importable from a checkout
sys.path.insert(0, str(Path(__file__).parent))

from web_api.app import app

if __name__ == '__main__':
    print("🚀 Starting Clonability Analysis API...")
    print("📊 API will be available at: http://localhost:8080/api")

    try:
        app.run(debug=True, host='127.0.0.1', port=8080, use_reloader=False)
    except KeyboardInterrupt:
        print("\n👋 API stopped.")
    except Exception as e:
        print(f"❌ Error starting API: {e}")
        print("💡 Make sure you're in the virtual environment and have set an AI provider key in .env.")

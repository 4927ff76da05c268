# app.py
"""
Thin runner that uses the app factory.
"""
import os

from archive import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)), debug=True)

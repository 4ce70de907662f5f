#!/usr/bin/env python3
"""
Main entry point for running the Movie Library Flask application.
"""

from movielibrary.app import app

if __name__ == "__main__":
    app.run(debug=True)

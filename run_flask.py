"""
DEVELOPMENT ENTRY POINT

For production deployments, use: wsgi.py

Runs the Flask development server with debug mode enabled.
"""
import os
import sys

sys.path.insert(0, os.path.abspath('.'))
sys.path.insert(0, os.path.abspath('./src'))

from ui.app import create_app

if __name__ == "__main__":
    create_app().run(debug=os.environ.get('FLASK_DEBUG', 'True').lower() == 'true')

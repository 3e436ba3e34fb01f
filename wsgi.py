import os
import sys

# Add the src directory to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
for path in (project_root, os.path.join(project_root, 'src')):
    if path not in sys.path:
        sys.path.insert(0, path)

from ui.app import create_app

application = create_app()

if __name__ == "__main__":
    application.run()

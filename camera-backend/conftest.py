"""
Root conftest - shared pytest configuration and fixtures.
Ensures camera_app package is discoverable when running pytest from camera-backend/.
"""
import sys
from pathlib import Path

# Ensure camera-backend root is in path for 'from camera_app...' imports
_root = Path(__file__).resolve().parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

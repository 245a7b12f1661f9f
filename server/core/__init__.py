# server/core/__init__.py

# radius_map/api/services/__init__.py

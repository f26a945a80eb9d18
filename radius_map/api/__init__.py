# radius_map/api/__init__.py

# factory_ops/presentation/__init__.py

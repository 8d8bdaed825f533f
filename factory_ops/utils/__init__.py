# factory_ops/utils/__init__.py

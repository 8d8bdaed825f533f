# factory_ops/business_logic/__init__.py
# Managers are imported from their own modules; repositories import entities from this package.

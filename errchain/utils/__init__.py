# errchain/utils/__init__.py

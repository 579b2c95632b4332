# searchguard/__init__.py
"""
Keep this file minimal so 'searchguard' is always a proper package.

Do NOT import submodules here (e.g., don't import main).
Tests and runtime should import from 'searchguard.main' directly:
    from searchguard.main import create_app
And Uvicorn should use:
    uvicorn searchguard.main:create_app --factory
"""

"""Simple development runner that imports the app factory and runs the Flask dev server.
Creates the schema on start; use this for manual API smoke testing only.
"""
from profiles import create_app

if __name__ == '__main__':
    app = create_app({"CREATE_SCHEMA": True})
    app.run(host='127.0.0.1', port=5001, debug=True)

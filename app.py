import os

from zkartifacts.web import create_app

# DB_PATH가 없으면 메모리 DB
app = create_app(os.environ.get("ZKARTIFACTS_DB_PATH"))


if __name__ == "__main__":
    app.run(debug=True)

"""
산출물 조회용 Flask Blueprint
==============================

  GET /artifacts           저장된 대상 이름 목록
  GET /artifacts/<name>    산출물 세 가지 (JSON), 없으면 404
"""

from flask import Blueprint, Flask, abort, current_app, jsonify

from zkartifacts.store import ArtifactStore

artifacts_bp = Blueprint("artifacts", __name__, url_prefix="/artifacts")


def get_store():
    return current_app.extensions["zkartifacts_store"]


@artifacts_bp.route("")
def list_artifacts():
    return jsonify(get_store().names())


@artifacts_bp.route("/<name>")
def show_artifacts(name):
    data = get_store().load_raw(name)
    if data is None:
        abort(404)
    return jsonify({"name": name, **data})


def create_app(db_path=None, store=None):
    """store를 주면 그대로 쓰고, 아니면 db_path로 ArtifactStore를 연다."""
    app = Flask(__name__)
    app.extensions["zkartifacts_store"] = store if store is not None else ArtifactStore(db_path)
    app.register_blueprint(artifacts_bp)
    return app

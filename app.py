from flask import Flask, jsonify

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from plonk_routes import plonk_bp, init_plonk_bp


def create_app(config=None):
    """toy PLONK 데모 앱.

    TOYPLONK_SETTINGS 환경변수가 가리키는 설정 파일과 config 딕셔너리를
    차례로 읽는다. DB_PATH를 주면 TinyDB 파일 저장소를, 아니면 메모리 DB를 쓴다.
    """
    app = Flask(__name__)
    app.config.from_mapping(SECRET_KEY="key", DB_PATH=None)
    app.config.from_envvar("TOYPLONK_SETTINGS", silent=True)
    if config is not None:
        app.config.update(config)

    if app.config["DB_PATH"]:
        DB = TinyDB(app.config["DB_PATH"])       # Storage DB
    else:
        DB = TinyDB(storage=MemoryStorage)       # Memory DB

    init_plonk_bp(DB.table("plonk"))
    app.register_blueprint(plonk_bp)

    @app.route("/")
    def main():
        return jsonify({
            "name": "toyplonk",
            "endpoints": sorted(
                str(rule) for rule in app.url_map.iter_rules() if str(rule).startswith("/plonk")
            ),
        })

    return app


if __name__ == "__main__":
    create_app().run(debug=True)

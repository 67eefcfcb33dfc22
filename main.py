from flask import Flask, request
from flask_cors import CORS
from dotenv import load_dotenv
from flasgger import Swagger
from swagger__config import SWAGGER_CONFIG, SWAGGER_TEMPLATE
import os

load_dotenv()
from salon_app.config import Config, masked_url  # noqa: E402
from salon_app.extensions import db  # noqa: E402
from salon_app.api.appointments import appointment_status_bp  # noqa: E402
from salon_app.api.resources import resource_blueprints  # noqa: E402
from salon_app.cli import init_cli  # noqa: E402
from salon_app.services.audit import init_audit  # noqa: E402


def create_app(config_class=Config):
    app = Flask(__name__)
    try:
        app.config.from_object(config_class)
        app.logger.info(
            f"Config loaded ({len(app.config)} items), database "
            f"{masked_url(app.config['SQLALCHEMY_DATABASE_URI'])}"
        )

        CORS(app)
        db.init_app(app)
        init_audit(app)
        init_cli(app)

        swagger_template = SWAGGER_TEMPLATE.copy()
        swagger_template["host"] = app.config.get("API_HOST", "127.0.0.1:5000")
        Swagger(app, config=SWAGGER_CONFIG, template=swagger_template)

        blueprints = [appointment_status_bp, *resource_blueprints()]
        for bp in blueprints:
            app.register_blueprint(bp)
        app.logger.info(f"{len(blueprints)} blueprints registered")

        @app.before_request
        def remember_actor():
            # recorded as audit.changed_by for every write in this request
            db.session.info["changed_by"] = request.headers.get("X-Changed-By")

        @app.route("/")
        def home():
            """
            Root endpoint - API status
            ---
            tags:
              - Utility
            responses:
              200:
                description: API is running
                schema:
                  type: object
                  properties:
                    status:
                      type: string
                    message:
                      type: string
            """
            return {"status": "ok", "message": "Backend is running!"}, 200

        if app.config.get("SCHEDULER_ENABLED"):
            from salon_app.scheduler import init_scheduler

            init_scheduler(app)

    except Exception as e:
        app.logger.error(f"Error during app creation: {e}")
        raise

    return app


if __name__ == "__main__":
    # Create a .env containing:
    #       MYSQL_PUBLIC_URL= mysql+pymysql://<USER>:<PASSWORD>@<HOST>:<PORT>/salon_app  # noqa: E501
    app = create_app()
    port = int(os.environ.get("PORT", 5000))
    app.run(
        host="0.0.0.0", port=port, debug=os.environ.get("FLASK_ENV") != "production"
    )

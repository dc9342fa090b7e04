import os

from dotenv import load_dotenv
from flask import Flask, send_file, jsonify
from flask_cors import CORS

from Controllers.errorController import error_bp
from Routes.userRoutes import user_routes
from Routes.shopRoutes import shop_routes
from Routes.productRoutes import product_routes
from Routes.eventRoutes import event_routes
from Routes.couponRoutes import coupon_routes
from Routes.paymentRoutes import payment_routes
from Routes.orderRoutes import order_routes
from Routes.withdrawRoutes import withdraw_routes
from Routes.resetRoutes import reset_routes
from Utils.db import init_db
from Utils.limiter import limiter
from Utils.logger import setup_logging
from Utils.uploads import load_image

load_dotenv()


def _env_flag(name, default):
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def create_app(test_config=None):
    # ----------------------------
    # Flask app configuration
    # ----------------------------
    app = Flask(__name__)
    app.config.from_mapping(
        SECRET_KEY=os.getenv("SECRET_KEY", "supersecretkey"),
        JWT_SECRET=os.getenv("JWT_SECRET", "super_jwt_secret"),
        JWT_EXPIRES_IN_DAYS=int(os.getenv("JWT_EXPIRES", 7)),
        ACTIVATION_SECRET=os.getenv("ACTIVATION_SECRET", "activation_secret"),
        MONGODB_URI=os.getenv("MONGODB_URI", "mongodb://localhost:27017/marketplace_db"),
        MONGO_CLIENT_CLASS=None,
        CLIENT_URL=os.getenv("CLIENT_URL", "http://localhost:3000"),
        COOKIE_SECURE=_env_flag("COOKIE_SECURE", "false"),
        LOG_DIR=os.getenv("LOG_DIR", "logs"),
        RATELIMIT_ENABLED=_env_flag("RATELIMIT_ENABLED", "true"),
        RATELIMIT_STORAGE_URI=os.getenv("RATELIMIT_STORAGE_URI", "memory://"),
        STRIPE_SECRET_KEY=os.getenv("STRIPE_SECRET_KEY"),
        STRIPE_API_KEY=os.getenv("STRIPE_API_KEY"),
        SERVICE_CHARGE_RATE=float(os.getenv("SERVICE_CHARGE_RATE", 0.10)),
        MAX_CONTENT_LENGTH=50 * 1024 * 1024,
    )
    if test_config:
        app.config.update(test_config)

    # Logging first so startup messages land in the log files
    setup_logging(app)

    init_db(app.config["MONGODB_URI"], app.config["MONGO_CLIENT_CLASS"])

    CORS(app, origins=[app.config["CLIENT_URL"]], supports_credentials=True)
    limiter.init_app(app)

    # ----------------------------
    # Register blueprints
    # ----------------------------
    app.register_blueprint(error_bp)
    app.register_blueprint(reset_routes)
    app.register_blueprint(user_routes)
    app.register_blueprint(shop_routes)
    app.register_blueprint(product_routes)
    app.register_blueprint(event_routes)
    app.register_blueprint(coupon_routes)
    app.register_blueprint(payment_routes)
    app.register_blueprint(order_routes)
    app.register_blueprint(withdraw_routes)

    @app.route("/uploads/<filename>")
    def get_uploaded_image(filename):
        data, mimetype = load_image(filename)
        return send_file(data, mimetype=mimetype, download_name=filename)

    @app.route("/test")
    def health():
        return jsonify({"success": True, "message": "Hello world!"})

    return app


# ----------------------------
# Run the app
# ----------------------------
if __name__ == '__main__':
    port = int(os.getenv('PORT', 8000))
    create_app().run(host='0.0.0.0', port=port, debug=False)

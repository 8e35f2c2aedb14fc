"""FormLoom - Flask 应用初始化.

基于 Flask 的表单定义管理服务: 自定义字段、布局、模板、表单、集合与提交记录.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from flask import Flask, jsonify, request
from flask.typing import ResponseReturnValue
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy

from formloom.constants import HttpHeaders
from formloom.settings import Settings
from formloom.utils.response_utils import unified_error_response
from formloom.utils.structlog_config import (
    ErrorContext,
    configure_structlog,
    enhanced_error_handler,
)

# 初始化扩展
db = SQLAlchemy()
cors = CORS()


def create_app(*, settings: Settings | None = None) -> Flask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.

    Returns:
        Flask: Flask应用实例

    """
    resolved_settings = settings or Settings.load()
    app = Flask(__name__)

    # 配置应用
    configure_app(app, resolved_settings)

    # 初始化扩展
    initialize_extensions(app, resolved_settings)

    # 注册 API
    configure_blueprints(app, resolved_settings)

    # 配置日志
    configure_logging(app)

    # 配置统一日志系统
    configure_structlog(app)

    # 设置全局日志级别
    log_level_name = str(app.config.get("LOG_LEVEL", "INFO"))
    logging.getLogger().setLevel(getattr(logging, log_level_name, logging.INFO))

    app.extensions["formloom.error_handler"] = enhanced_error_handler

    # 注册全局错误处理器
    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        """全局错误处理."""
        payload, status_code = unified_error_response(error, context=ErrorContext(error, request))
        return jsonify(payload), status_code

    with app.app_context():
        db.create_all()

    return app


def configure_app(app: Flask, settings: Settings) -> None:
    """写入 Settings 提供的配置.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,包含环境变量解析、默认值与校验结果.

    """
    app.config.from_mapping(settings.to_flask_config())
    app.config.setdefault("APPLICATION_ROOT", "/")
    app.json.ensure_ascii = False


def initialize_extensions(app: Flask, settings: Settings) -> None:
    """初始化数据库与 CORS 扩展."""
    db.init_app(app)

    allowed_origins = list(settings.cors_origins)
    cors.init_app(
        app,
        resources={
            r"/api/*": {
                "origins": allowed_origins,
                "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                "allow_headers": [HttpHeaders.CONTENT_TYPE, HttpHeaders.AUTHORIZATION, HttpHeaders.X_REQUEST_ID],
            },
        },
    )


def configure_blueprints(app: Flask, settings: Settings) -> None:
    """注册 `/api/v1` 蓝图."""
    from formloom.api import register_api_blueprints  # noqa: PLC0415

    register_api_blueprints(app, settings)


def configure_logging(app: Flask) -> None:
    """配置日志系统与文件处理器.

    调试与测试模式下不落盘.
    """
    if not app.debug and not app.testing:
        log_path = Path(app.config["LOG_FILE"])
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=app.config["LOG_MAX_SIZE"],
            backupCount=app.config["LOG_BACKUP_COUNT"],
        )
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"),
        )
        file_handler.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        app.logger.addHandler(file_handler)

        app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        app.logger.info("FormLoom 应用启动")


from formloom.models import (  # noqa: F401, E402
    collection,
    custom_field,
    form,
    form_layout,
    submission,
    template,
)

import os
import logging
from logging.handlers import TimedRotatingFileHandler, SMTPHandler
import gzip
import glob
import time
import re
from datetime import datetime
from collections import defaultdict
import click
from flask import request
from flask.cli import with_appcontext


LOG_FORMAT = "%(asctime)s [%(levelname)s] in %(module)s: %(message)s"
LOG_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2}).*\[(INFO|ERROR|WARNING)\]")


def _rotating_handler(path, backup_count, level, formatter):
    handler = TimedRotatingFileHandler(
        path, when="midnight", interval=1, backupCount=backup_count,
        encoding="utf-8", delay=True
    )
    handler.suffix = "%Y-%m-%d"
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


# ==================================================
# LOGGING SETUP
# ==================================================
def setup_logging(app):
    """Configure logging for the Flask app."""
    log_dir = app.config.get("LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)

    # Prevent duplicate log handlers when Flask auto-reloads
    if getattr(app, "_logging_configured", False):
        return app.logger
    app._logging_configured = True

    formatter = logging.Formatter(LOG_FORMAT)
    access_formatter = logging.Formatter("%(asctime)s - %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.INFO)

    # -------------------------
    # APPLICATION LOGGER
    # -------------------------
    app_logger = app.logger
    app_logger.setLevel(logging.INFO)
    app_logger.addHandler(_rotating_handler(os.path.join(log_dir, "app.log"), 14, logging.INFO, formatter))
    app_logger.addHandler(_rotating_handler(os.path.join(log_dir, "error.log"), 30, logging.ERROR, formatter))
    app_logger.addHandler(console_handler)

    # Module loggers (Controllers.*, Utils.*) share the app handlers
    for name in ("Controllers", "Utils", "Models"):
        module_logger = logging.getLogger(name)
        module_logger.setLevel(logging.INFO)
        module_logger.handlers = app_logger.handlers[:]
        module_logger.propagate = False

    # -------------------------
    # ACCESS LOGGER
    # -------------------------
    access_logger = logging.getLogger("access")
    access_logger.setLevel(logging.INFO)
    access_logger.addHandler(_rotating_handler(os.path.join(log_dir, "access.log"), 7, logging.INFO, access_formatter))
    access_console = logging.StreamHandler()
    access_console.setFormatter(access_formatter)
    access_console.setLevel(logging.INFO)
    access_logger.addHandler(access_console)

    # -------------------------
    # ORDERS LOGGER (balance + inventory bookkeeping)
    # -------------------------
    orders_logger = logging.getLogger("orders")
    orders_logger.setLevel(logging.INFO)
    orders_logger.addHandler(_rotating_handler(os.path.join(log_dir, "orders.log"), 30, logging.INFO, formatter))
    orders_logger.addHandler(console_handler)

    # ERROR alerts go out over the same SMTP relay as account mail
    alert_handler = _smtp_alert_handler(app, formatter)
    if alert_handler:
        app_logger.addHandler(alert_handler)

    register_access_log_hook(app, access_logger)
    cleanup_old_logs(app, log_dir)
    register_log_summary_command(app)

    app_logger.info("🚀 Logging initialized successfully.")
    return app_logger


def _smtp_alert_handler(app, formatter):
    """ERROR-level mail alerts, enabled by ENABLE_SMTP_ALERTS outside debug mode."""
    if app.debug or os.getenv("ENABLE_SMTP_ALERTS", "false").lower() not in ("1", "true", "yes"):
        return None

    recipients = [a.strip() for a in os.getenv("SMTP_TO", "").split(",") if a.strip()]
    if not recipients:
        app.logger.warning("⚠️ ENABLE_SMTP_ALERTS is set but SMTP_TO is empty; alerts disabled")
        return None

    user, password = os.getenv("SMTP_USER"), os.getenv("SMTP_PASS")
    handler = SMTPHandler(
        mailhost=(os.getenv("SMTP_HOST", "localhost"), int(os.getenv("SMTP_PORT", 1025))),
        fromaddr=os.getenv("EMAIL_SENDER", "noreply@marketplace.com"),
        toaddrs=recipients,
        subject="🚨 Marketplace API error",
        credentials=(user, password) if user and password else None,
        secure=() if user and password else None,
    )
    handler.setLevel(logging.ERROR)
    handler.setFormatter(formatter)
    return handler


# ==================================================
# ACCESS LOGGING
# ==================================================
def register_access_log_hook(app, access_logger):
    """Logs each incoming request (IP, method, URL) into access.log."""

    @app.before_request
    def log_request_info():
        access_logger.info(f"{request.remote_addr} {request.method} {request.url}")


# ==================================================
# OLD LOG CLEANUP & COMPRESSION
# ==================================================
def cleanup_old_logs(app, folder="logs", days=7):
    """Compress rotated logs and delete archives older than ``days``."""
    now = time.time()
    for log_file in glob.glob(f"{folder}/*.log.*"):
        if log_file.endswith(".gz"):
            continue
        try:
            with open(log_file, "rb") as f_in:
                with gzip.open(f"{log_file}.gz", "wb") as f_out:
                    f_out.writelines(f_in)
            os.remove(log_file)
            app.logger.info(f"🗜️ Compressed log: {log_file}")
        except OSError as e:
            app.logger.error(f"❌ Failed to compress {log_file}: {e}")

    for gz_file in glob.glob(f"{folder}/*.gz"):
        if os.stat(gz_file).st_mtime < now - days * 86400:
            os.remove(gz_file)
            app.logger.info(f"🧹 Deleted old log: {gz_file}")


# ==================================================
# CLI LOG SUMMARY COMMAND
# ==================================================
def summarize_log_dir(log_dir, days=7):
    """Count INFO/WARNING/ERROR lines per day in app and error logs."""
    summary = defaultdict(lambda: {"INFO": 0, "ERROR": 0, "WARNING": 0})
    now = datetime.now()

    for filename in os.listdir(log_dir):
        if not filename.startswith(("app.log", "error.log", "orders.log")):
            continue

        path = os.path.join(log_dir, filename)
        mtime = datetime.fromtimestamp(os.path.getmtime(path))
        if (now - mtime).days > days:
            continue

        opener = gzip.open if filename.endswith(".gz") else open
        with opener(path, "rt", encoding="utf-8", errors="ignore") as f:
            for line in f:
                match = LOG_PATTERN.match(line)
                if match:
                    date_str, level = match.groups()
                    summary[date_str][level] += 1

    return dict(sorted(summary.items()))


def format_summary(summary):
    """Render summarize_log_dir output as one row per day plus a totals row."""
    totals = {"INFO": 0, "WARNING": 0, "ERROR": 0}
    rows = []
    for date_str, counts in summary.items():
        rows.append(f"{date_str}  " + "  ".join(f"{level}: {counts[level]:<5}" for level in totals))
        for level in totals:
            totals[level] += counts[level]
    rows.append("total       " + "  ".join(f"{level}: {count:<5}" for level, count in totals.items()))
    return rows


def register_log_summary_command(app):
    """Adds 'flask logs:summary' CLI command to view log stats."""

    @click.command("logs:summary")
    @with_appcontext
    @click.option("--days", default=7, help="Days of logs to summarize")
    def summarize_logs(days):
        summary = summarize_log_dir(app.config.get("LOG_DIR", "logs"), days)
        if not summary:
            click.echo("No log entries found in the specified time range.")
            return

        click.echo(f"📊 Log summary for {app.config.get('LOG_DIR', 'logs')} (last {days} days)")
        for row in format_summary(summary):
            click.echo(row)

    app.cli.add_command(summarize_logs)

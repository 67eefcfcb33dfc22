from apscheduler.schedulers.background import BackgroundScheduler
import atexit
from datetime import datetime
from salon_app.extensions import db
from salon_app.services.appointments import advance_past_due
from salon_app.services.stats import refresh_monthly_stats

scheduler = BackgroundScheduler()


def init_scheduler(app):
    """Initialize the APScheduler scheduler with Flask app context."""

    @scheduler.scheduled_job("interval", minutes=5, id="advance_past_due")
    def advance_appointments():
        """Appointments that have ended move on to pending_payment."""
        current_time = datetime.now()
        try:
            with app.app_context():
                count = advance_past_due(db.session, now=current_time)
                app.logger.info(f"[SCHEDULER] {count} appointment(s) awaiting payment")
        except Exception as e:
            app.logger.error(f"[SCHEDULER] Error advancing appointments: {e}")
            with app.app_context():
                db.session.rollback()

    @scheduler.scheduled_job("cron", hour=2, minute=0, id="refresh_monthly_stats")
    def refresh_stats():
        """Recount the current month's users and revenue every night."""
        today = datetime.now()
        try:
            with app.app_context():
                refresh_monthly_stats(db.session, today.year, today.month)
        except Exception as e:
            app.logger.error(f"[SCHEDULER] Error refreshing monthly stats: {e}")
            with app.app_context():
                db.session.rollback()

    if not scheduler.running:
        scheduler.start()
        app.logger.info("[SCHEDULER] Scheduler started")
    else:
        app.logger.info("[SCHEDULER] Scheduler already running (skipping duplicate start)")

    # Shut down the scheduler when exiting the app
    atexit.register(lambda: scheduler.shutdown(wait=False))

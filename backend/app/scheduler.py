"""
Planificateur APScheduler pour la purge des sessions expirées.

Le job s'exécute toutes les SESSION_PURGE_INTERVAL_MINUTES et retire du store
les sessions dont la durée de vie est dépassée.
"""

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from app.config import settings
from app.sessions import SessionStore

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler()


def _purge_expired_sessions(store: SessionStore) -> None:
    """Tâche planifiée : supprime les sessions expirées."""
    try:
        purged = store.purge_expired()
        if purged:
            logger.info("%d session(s) expirée(s) supprimée(s).", purged)
    except Exception as exc:
        logger.error("Erreur lors de la purge des sessions : %s", exc)


def start_scheduler(store: SessionStore) -> None:
    """Démarre le planificateur en arrière-plan (appelé au démarrage de l'API)."""
    scheduler.add_job(
        _purge_expired_sessions,
        trigger="interval",
        minutes=settings.SESSION_PURGE_INTERVAL_MINUTES,
        args=[store],
        id="session_purge",
        replace_existing=True,
    )
    if not scheduler.running:
        scheduler.start()
    logger.info(
        "Scheduler démarré — purge des sessions toutes les %d minutes.",
        settings.SESSION_PURGE_INTERVAL_MINUTES,
    )


def stop_scheduler() -> None:
    """Arrête le planificateur proprement (appelé à l'arrêt de l'API)."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler arrêté.")

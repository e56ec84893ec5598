"""APScheduler configuration for scheduled lead re-enrichment."""

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
import logging

from leadscope.config import settings

logger = logging.getLogger(__name__)

# Create scheduler instance
scheduler = AsyncIOScheduler()


async def run_scheduled_enrichment(service):
    """
    Re-enrich and rescore every lead.
    Called by APScheduler.
    """
    from leadscope.database import AsyncSessionLocal
    from leadscope.services.batch_enrichment import BatchEnrichmentScheduler
    from leadscope.services.lead_service import enrich_all_leads

    logger.info("Running scheduled lead enrichment...")

    try:
        batch = BatchEnrichmentScheduler(
            service,
            window_size=settings.BATCH_WINDOW_SIZE,
            pacing_delay=settings.BATCH_PACING_SECONDS,
        )
        async with AsyncSessionLocal() as db:
            enriched = await enrich_all_leads(db, batch, settings.SCORING_STRATEGY)

        logger.info(f"Scheduled enrichment complete: {enriched} leads enriched, stats={batch.get_stats()}")
    except Exception as e:
        logger.error(f"Error in scheduled enrichment: {e}", exc_info=True)


def start_scheduler(service):
    """
    Initialize and start the APScheduler.

    Jobs:
    - Lead re-enrichment: at ENRICHMENT_SCHEDULE_HOURS (UTC), minute 0
    """
    if scheduler.running:
        logger.info("Scheduler already running")
        return

    try:
        scheduler.add_job(
            run_scheduled_enrichment,
            trigger=CronTrigger(hour=settings.ENRICHMENT_SCHEDULE_HOURS, minute=0),
            args=[service],
            id='lead_enrichment',
            name='Lead Re-enrichment',
            replace_existing=True,
            max_instances=1
        )
        logger.info(f"✅ Scheduled: Lead Re-enrichment (hours {settings.ENRICHMENT_SCHEDULE_HOURS} UTC)")

        scheduler.start()
        logger.info("✅ APScheduler started successfully!")

        for job in scheduler.get_jobs():
            logger.info(f"   • {job.name}: Next run at {job.next_run_time}")

    except Exception as e:
        logger.error(f"❌ Error starting scheduler: {e}")


def stop_scheduler():
    """Stop the scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler stopped")

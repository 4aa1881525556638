#!/usr/bin/env python3
"""
Drive one seeded job from New through to Completed.
"""

import asyncio
from datetime import datetime, timedelta, timezone

from fibretrack.application.services.activation_policy import ScriptedActivationPolicy
from fibretrack.config.logging import configure_logging, get_logger
from fibretrack.container import build_container

logger = get_logger(__name__)

JOB_ID = 1


def _check(result, step: str):
    if not result.success:
        logger.warning("Step rejected", step=step, message=result.message)
    else:
        logger.info("Step done", step=step)
    return result


async def run_demo() -> None:
    """Run the happy path, with one forced activation failure on the way."""
    container = build_container(
        with_seed_data=True,
        activation_policy=ScriptedActivationPolicy([True]),
    )
    jobs = container.jobs
    installations = container.installations

    _check(await jobs.assign_job(JOB_ID, installer_id=4, supervisor_id=2), "assign")
    _check(
        await jobs.schedule_job(
            JOB_ID, datetime.now(timezone.utc) + timedelta(days=1)
        ),
        "schedule",
    )
    _check(await jobs.mark_enroute(JOB_ID), "enroute")
    _check(await jobs.verify_otp(JOB_ID, "0000"), "verify otp (wrong code)")
    _check(await jobs.verify_otp(JOB_ID, "1234"), "verify otp")

    started = _check(await installations.start_installation(JOB_ID), "start")
    installation = started.data

    for device in installation.devices:
        number = device.device_number
        await installations.add_installation_photo(
            installation.id, number, f"install_{JOB_ID}_{number}.jpg"
        )
        _check(
            await installations.complete_device_installation(installation.id, number),
            f"install device {number}",
        )
        await installations.add_inventory_item(
            installation.id, number, serial_number=f"SN-{JOB_ID}-{number}", device_type="ONT"
        )
        await installations.add_serial_photo(
            installation.id, number, f"serial_{JOB_ID}_{number}.jpg"
        )
        _check(
            await installations.complete_device_serial(installation.id, number),
            f"serial device {number}",
        )

    _check(await installations.activate_installation(installation.id), "activate")
    _check(await jobs.resolve_hold_over(JOB_ID), "resolve hold-over")
    _check(await installations.activate_installation(installation.id), "activate again")
    _check(await jobs.complete_job(JOB_ID), "complete")

    final = await jobs.get_job(JOB_ID)
    logger.info("Demo finished", job_id=JOB_ID, status=final.data.status.value)


if __name__ == "__main__":
    configure_logging()
    asyncio.run(run_demo())

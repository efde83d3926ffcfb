from sqlalchemy.orm import Session
from app.models.system_log import SystemLog


def log_action(
    db: Session,
    action: str,
    details: str | None = None,
    created_by: str | None = None,
) -> None:
    """
    Write a system log entry.

    Args:
        db:         Active DB session (not committed here; the caller commits)
        action:     Short label shown in the activity feed: "Stock In", "Stock Out", "LPO Update"
        details:    Human-readable description
        created_by: Display name of the actor (see ``dependencies.actor_name``)

    Usage:
        log_action(db, "Stock Out", f"Issued {qty} units of {item.name} to {takenby}",
                   actor_name(current_user))
        db.commit()
    """
    entry = SystemLog(
        action=action,
        details=details,
        created_by=created_by or "System",
    )
    db.add(entry)
    # The caller commits

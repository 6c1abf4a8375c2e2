# backend/utils/audit.py
from typing import Optional

from fastapi import Request
from sqlalchemy.orm import Session
from models.log import Log


def client_ip(request: Optional[Request]) -> Optional[str]:
    if request is None or request.client is None:
        return None
    return request.client.host


# Persist one audit entry; runs in its own commit after the audited change
def write_log(db: Session, *, user_id, action, resource, status="SUCCESS", request: Optional[Request] = None, meta=None):
    entry = Log(user_id=user_id, action=action, resource=resource, status=status, ip=client_ip(request), meta=meta or {})
    db.add(entry)
    db.commit()

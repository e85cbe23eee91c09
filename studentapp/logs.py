import json, time, uuid, logging, datetime as dt
from typing import Optional

_HANDLER_NAME = "studentapp-stream"

oplog = logging.getLogger("studentapp.oplog")


def configure_logging(level: str = "INFO"):
    """Attach one stream handler to the `studentapp` logger unless logging is already set up."""
    root = logging.getLogger("studentapp")
    root.setLevel(level)
    # host process (pytest, a custom logging config) already routes records
    if logging.getLogger().handlers:
        return
    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return
    h = logging.StreamHandler()
    h.set_name(_HANDLER_NAME)
    h.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(h)


class LogContext:
    """Collects what a write operation touched and emits one line when done."""

    def __init__(self, action: str):
        self.action = action
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.payload = None
        self.entity_type = None
        self.entity_id = None

    def set_entity(self, etype: str, eid):
        self.entity_type = etype
        self.entity_id = None if eid is None else str(eid)

    def set_payload(self, obj): self.payload = obj

    def record(self, result: str = "OK", err: Optional[str] = None) -> dict:
        elapsed_ms = int((time.perf_counter() - self.start) * 1000)
        return {
            "ts": dt.datetime.now(dt.timezone.utc).isoformat(),
            "action": self.action,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "request_id": self.request_id,
            "payload": self.payload,
            "result": result,
            "err_msg": err,
            "latency_ms": elapsed_ms,
        }

    def write(self, result: str = "OK", err: Optional[str] = None):
        rec = self.record(result, err)
        level = logging.WARNING if result == "ERROR" else logging.INFO
        oplog.log(level, json.dumps(rec, ensure_ascii=False))
        return rec

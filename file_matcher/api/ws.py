"""WebSocket endpoint for live progress updates."""

import json

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..models.archive import ArchiveJob
from ..models.progress import ProgressSnapshot
from ..services.archive_manager import archive_manager
from ..services.workspace_manager import workspace_manager

router = APIRouter(tags=["websocket"])


class ConnectionManager:
    def __init__(self):
        self.active: list[WebSocket] = []

    async def connect(self, ws: WebSocket):
        await ws.accept()
        self.active.append(ws)

    def disconnect(self, ws: WebSocket):
        if ws in self.active:
            self.active.remove(ws)


manager = ConnectionManager()


@router.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await manager.connect(ws)
    subscriptions = []

    async def send(message: dict) -> None:
        await ws.send_json(message)

    try:
        while True:
            data = await ws.receive_text()
            try:
                msg = json.loads(data)
            except json.JSONDecodeError:
                continue

            action = msg.get("action")

            if action == "subscribe_workspace":
                workspace_id = msg.get("workspace_id")
                if workspace_id:
                    async def progress_cb(wid: str, snapshot: ProgressSnapshot):
                        await send({
                            "type": "progress",
                            "workspace_id": wid,
                            "progress": snapshot.model_dump(mode="json"),
                        })
                    workspace_manager.add_progress_listener(workspace_id, progress_cb)
                    subscriptions.append(
                        lambda wid=workspace_id, cb=progress_cb:
                            workspace_manager.remove_progress_listener(wid, cb)
                    )

            elif action == "subscribe_archive":
                job_id = msg.get("job_id")
                if job_id:
                    async def archive_cb(job: ArchiveJob):
                        await send({
                            "type": "archive",
                            "job_id": job.id,
                            "status": job.status.value,
                            "progress": job.progress.model_dump(),
                        })
                    archive_manager.add_progress_listener(job_id, archive_cb)
                    subscriptions.append(
                        lambda jid=job_id, cb=archive_cb:
                            archive_manager.remove_progress_listener(jid, cb)
                    )

    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(ws)
        for unsubscribe in subscriptions:
            unsubscribe()

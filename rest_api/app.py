# rest_api/app.py
import os
import threading
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Header
from pydantic import BaseModel, Field

API_KEY = os.getenv("TASKS_API_KEY", "")


# ---------- Models ----------
class TaskModel(BaseModel):
    id: str = Field(..., min_length=1, description="Stable task identifier")
    title: str = ""
    description: str = ""
    completed: bool = False


class TaskList(BaseModel):
    tasks: List[TaskModel]


# ---------- Store ----------
# Insertion-ordered so clients receive tasks in creation order.
TASKS: Dict[str, TaskModel] = {}
TASKS_LOCK = threading.Lock()


def reset_store() -> None:
    with TASKS_LOCK:
        TASKS.clear()


app = FastAPI(title="Taskboard Task API", version="0.1.0")


def require_key(x_api_key: Optional[str]):
    if API_KEY and x_api_key != API_KEY:
        raise HTTPException(401, "Unauthorized")


def _get_or_404(task_id: str) -> TaskModel:
    task = TASKS.get(task_id)
    if task is None:
        raise HTTPException(404, f"Task {task_id} not found")
    return task


@app.get("/health")
def health(x_api_key: Optional[str] = Header(None)):
    require_key(x_api_key)
    with TASKS_LOCK:
        count = len(TASKS)
    return {"ok": True, "tasks": count}


@app.get("/tasks", response_model=TaskList)
def list_tasks(x_api_key: Optional[str] = Header(None)):
    require_key(x_api_key)
    with TASKS_LOCK:
        return TaskList(tasks=list(TASKS.values()))


@app.get("/tasks/{task_id}", response_model=TaskModel)
def get_task(task_id: str, x_api_key: Optional[str] = Header(None)):
    require_key(x_api_key)
    with TASKS_LOCK:
        return _get_or_404(task_id)


@app.post("/tasks", response_model=TaskModel)
def save_task(task: TaskModel, x_api_key: Optional[str] = Header(None)):
    """Create a task or replace the one with the same id."""
    require_key(x_api_key)
    with TASKS_LOCK:
        TASKS[task.id] = task
    return task


@app.post("/tasks/clear-completed")
def clear_completed(x_api_key: Optional[str] = Header(None)):
    require_key(x_api_key)
    with TASKS_LOCK:
        doomed = [task_id for task_id, task in TASKS.items() if task.completed]
        for task_id in doomed:
            del TASKS[task_id]
    return {"removed": len(doomed)}


def _set_completed(task_id: str, completed: bool) -> TaskModel:
    with TASKS_LOCK:
        task = _get_or_404(task_id)
        updated = task.model_copy(update={"completed": completed})
        TASKS[task_id] = updated
        return updated


@app.post("/tasks/{task_id}/complete", response_model=TaskModel)
def complete_task(task_id: str, x_api_key: Optional[str] = Header(None)):
    require_key(x_api_key)
    return _set_completed(task_id, True)


@app.post("/tasks/{task_id}/activate", response_model=TaskModel)
def activate_task(task_id: str, x_api_key: Optional[str] = Header(None)):
    require_key(x_api_key)
    return _set_completed(task_id, False)


@app.delete("/tasks/{task_id}", status_code=204)
def delete_task(task_id: str, x_api_key: Optional[str] = Header(None)):
    require_key(x_api_key)
    with TASKS_LOCK:
        _get_or_404(task_id)
        del TASKS[task_id]


@app.delete("/tasks", status_code=204)
def delete_all_tasks(x_api_key: Optional[str] = Header(None)):
    require_key(x_api_key)
    reset_store()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.getenv("TASKS_HOST", "127.0.0.1"), port=int(os.getenv("TASKS_PORT", "8000")))

# artvista/celery_worker.py
from celery import Celery

from artvista.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, CELERY_TASK_ALWAYS_EAGER

celery_app = Celery(
    "artvista",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# Explicite importuj taski, zeby Celery je zarejestrowal
celery_app.conf.imports = ("artvista.tasks.sweep",)

celery_app.conf.timezone = "UTC"

#tryb eager: task wykonuje sie synchronicznie w procesie api (testy, lokalnie bez brokera)
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
celery_app.conf.task_eager_propagates = CELERY_TASK_ALWAYS_EAGER

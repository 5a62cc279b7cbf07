import threading

from flask import current_app
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis import Redis
from redis.exceptions import RedisError
from rq import Queue

# RQ enqueue options that must not reach the job function when it runs locally
RQ_KEYS = {'job_timeout', 'timeout', 'at_front', 'depends_on', 'result_ttl', 'ttl', 'meta', 'description'}


class RQWrapper:
    """Fire-and-forget submission of background jobs.

    Jobs go to RQ when Redis is configured. When it is not, or when enqueueing
    fails, the job runs in a daemon thread with its own app context. With
    ``TASKS_EAGER`` the job runs inline. In the local modes a failing job is
    logged and never raised to the submitter.
    """

    def __init__(self):
        self.redis = None
        self.queue = None

    def init_app(self, app):
        url = app.config.get("REDIS_URL")
        if not url or app.config.get("TASKS_EAGER"):
            self.redis = None
            self.queue = None
            return
        # Redis.from_url does not connect yet, a dead server shows up on enqueue
        self.redis = Redis.from_url(url)
        self.queue = Queue(app.config.get("RQ_QUEUE", "default"), connection=self.redis)

    def enqueue(self, func, *args, **kwargs):
        app = current_app._get_current_object()
        if app.config.get("TASKS_EAGER"):
            self._call(app, func, args, kwargs)
            return None

        if self.queue is not None:
            try:
                return self.queue.enqueue(func, *args, **kwargs)
            except RedisError:
                app.logger.exception('RQ enqueue failed, running %s in a background thread', func.__name__)

        thread = threading.Thread(
            target=self._run_local,
            args=(app, func, args, kwargs),
            name=f"task-{func.__name__}",
            daemon=True,
        )
        thread.start()
        return None

    @classmethod
    def _run_local(cls, app, func, args, kwargs):
        with app.app_context():
            cls._call(app, func, args, kwargs)

    @staticmethod
    def _call(app, func, args, kwargs):
        safe_kwargs = {k: v for k, v in kwargs.items() if k not in RQ_KEYS}
        try:
            func(*args, **safe_kwargs)
        except Exception:
            app.logger.exception('Background task %s failed', func.__name__)


db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
rq = RQWrapper()

"""
Deferred ("fire now, collect later") request execution.

One request at a time runs on a background worker thread:

    slot = TaskSlot()
    slot.start(spec, transport)     # returns immediately
    ...
    outcome = slot.wait()           # joins the worker, empties the slot

A slot holds at most one task. Its lifecycle is

    EMPTY -> RUNNING -> COMPLETED -> EMPTY

``start`` only succeeds on an EMPTY slot and ``wait`` is the only way back
to EMPTY. There is no cancellation and no timeout: a started task runs to
completion.

Each Client gets its own slot. Sharing one slot between several clients
limits them to a single outstanding request between them.
"""

import enum
import logging
import threading
from typing import Optional

from ._exceptions import NoTaskOutstanding, TaskSlotBusy
from ._executor import execute
from ._models import RequestOutcome, RequestSpec
from ._transport import Transport

logger = logging.getLogger(__name__)


class SlotState(enum.Enum):
    EMPTY = "empty"
    RUNNING = "running"
    COMPLETED = "completed"


class AsyncTask:
    """One deferred request and the worker thread that runs it.

    After the worker starts it writes only ``outcome`` (or the unexpected
    exception) and then ``completed``. Everything it wrote is visible to
    whoever joins the thread.
    """

    def __init__(self, spec: RequestSpec, transport: Transport):
        self.spec = spec
        self.outcome: Optional[RequestOutcome] = None
        self.completed = False
        self.claimed = False
        self._transport = transport
        self._error: Optional[BaseException] = None
        self._thread = threading.Thread(
            target=self._run, name="httpdefer-worker", daemon=True
        )

    def _run(self):
        try:
            self.outcome = execute(self.spec, self._transport)
        except Exception as e:
            logger.exception("Worker for %s %s crashed", self.spec.method.value, self.spec.url)
            self._error = e
        finally:
            self.completed = True

    def start(self):
        self._thread.start()

    def join(self):
        self._thread.join()

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    def result(self) -> RequestOutcome:
        """Outcome of a joined task; re-raises an error that killed the worker"""
        if self._error is not None:
            raise self._error
        return self.outcome


class TaskSlot:
    """Single-capacity holder for one deferred request"""

    def __init__(self):
        self._lock = threading.Lock()
        self._task: Optional[AsyncTask] = None

    @property
    def state(self) -> SlotState:
        """Current state; never blocks and never reaps"""
        task = self._task
        if task is None:
            return SlotState.EMPTY
        if task.completed:
            return SlotState.COMPLETED
        return SlotState.RUNNING

    @property
    def pending(self) -> bool:
        return self._task is not None

    def start(self, spec: RequestSpec, transport: Transport) -> AsyncTask:
        """Spawn a worker for ``spec``.

        Args:
            spec: The request to run; its headers must already be a snapshot
            transport: Transport the worker performs the exchange with

        Returns:
            The running task

        Raises:
            TaskSlotBusy: A task is already outstanding; it is left untouched
        """
        with self._lock:
            if self._task is not None:
                raise TaskSlotBusy()
            task = AsyncTask(spec, transport)
            task.start()
            self._task = task

        logger.debug("Started async %s %s", spec.method.value, spec.url)
        return task

    def wait(self) -> RequestOutcome:
        """Block until the outstanding task finishes, then empty the slot.

        The slot stays occupied while the worker is joined, so a concurrent
        ``start`` still fails and a concurrent ``wait`` raises
        NoTaskOutstanding.

        Raises:
            NoTaskOutstanding: The slot is empty or another caller is
                already reaping its task
        """
        with self._lock:
            task = self._task
            if task is None or task.claimed:
                raise NoTaskOutstanding()
            task.claimed = True

        try:
            task.join()
        except BaseException:
            with self._lock:
                task.claimed = False
            raise

        with self._lock:
            self._task = None

        logger.debug("Reaped async %s %s", task.spec.method.value, task.spec.url)
        return task.result()

    def __repr__(self):
        return f"<TaskSlot {self.state.value}>"

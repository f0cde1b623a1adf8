"""
Scan Service
Runs scans on worker threads so callers stay responsive; results publish atomically
"""

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from threading import Event, Lock, Thread
from typing import Any, Dict, Optional

from ..errors import ScanCancelledError
from ..matching.models import ScanResult
from ..monitoring import get_logger, get_performance_tracker
from .match_planner import MatchPlanner


class JobStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class ScanJob:
    """One scan request and, once finished, its result"""
    id: str
    source_dir: str
    destination_root: str
    threshold: float
    status: JobStatus = JobStatus.PENDING
    created_at: str = ""
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    error_message: Optional[str] = None
    result: Optional[ScanResult] = None
    cancel_event: Event = field(default_factory=Event, repr=False)

    def __post_init__(self):
        if not self.created_at:
            self.created_at = datetime.now().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'status': self.status.value,
            'source_dir': self.source_dir,
            'destination_root': self.destination_root,
            'threshold': self.threshold,
            'created_at': self.created_at,
            'started_at': self.started_at,
            'completed_at': self.completed_at,
            'error_message': self.error_message,
            'result': self.result.to_dict() if self.result else None,
        }


class ScanService:
    """Owns scan jobs; each job runs on its own daemon thread"""

    def __init__(self, planner: Optional[MatchPlanner] = None, max_jobs: int = 50):
        self.logger = get_logger('scan_service')
        self.planner = planner or MatchPlanner()
        self.max_jobs = max_jobs
        self.jobs: Dict[str, ScanJob] = {}
        self.jobs_lock = Lock()

    def run_scan(self, source_dir: str, destination_root: str, threshold: float) -> ScanResult:
        """Synchronous scan; ScanError propagates to the caller"""
        start_time = time.time()
        try:
            result = self.planner.propose_moves(Path(source_dir), Path(destination_root), threshold)
        except Exception:
            get_performance_tracker().record_operation('scan', time.time() - start_time, success=False)
            raise
        get_performance_tracker().record_operation('scan', time.time() - start_time)
        return result

    def submit_scan(self, source_dir: str, destination_root: str, threshold: float) -> str:
        """Start a background scan and return its job id"""
        job = ScanJob(
            id=str(uuid.uuid4()),
            source_dir=str(source_dir),
            destination_root=str(destination_root),
            threshold=threshold,
        )

        with self.jobs_lock:
            self._evict_finished_jobs()
            self.jobs[job.id] = job

        worker = Thread(target=self._run_job, args=(job,), name=f"ScanWorker-{job.id[:8]}")
        worker.daemon = True
        worker.start()

        self.logger.info("Scan job submitted",
                         job_id=job.id,
                         source_dir=job.source_dir,
                         destination_root=job.destination_root,
                         threshold=threshold)
        return job.id

    def _run_job(self, job: ScanJob):
        with self.jobs_lock:
            if job.cancel_event.is_set():
                return
            job.status = JobStatus.RUNNING
            job.started_at = datetime.now().isoformat()

        start_time = time.time()
        try:
            result = self.planner.propose_moves(
                Path(job.source_dir),
                Path(job.destination_root),
                job.threshold,
                should_stop=job.cancel_event.is_set,
            )
        except ScanCancelledError:
            # Partial work is dropped; status was already set by cancel_scan
            self.logger.info("Scan job abandoned", job_id=job.id)
            return
        except Exception as e:
            with self.jobs_lock:
                job.status = JobStatus.FAILED
                job.completed_at = datetime.now().isoformat()
                job.error_message = str(e)
            get_performance_tracker().record_operation('scan', time.time() - start_time, success=False)
            self.logger.error("Scan job failed", job_id=job.id, exception=e)
            return

        with self.jobs_lock:
            if job.status == JobStatus.CANCELLED:
                return
            job.result = result
            job.status = JobStatus.COMPLETED
            job.completed_at = datetime.now().isoformat()

        get_performance_tracker().record_operation('scan', time.time() - start_time)
        self.logger.info("Scan job completed",
                         job_id=job.id,
                         candidates=len(result.candidates),
                         matched=len(result.matched))

    def cancel_scan(self, job_id: str) -> bool:
        """Abandon a pending or running scan; scanning never mutates the filesystem"""
        with self.jobs_lock:
            job = self.jobs.get(job_id)
            if not job or job.status not in (JobStatus.PENDING, JobStatus.RUNNING):
                return False
            job.cancel_event.set()
            job.status = JobStatus.CANCELLED
            job.completed_at = datetime.now().isoformat()

        self.logger.info("Scan job cancelled", job_id=job_id)
        return True

    def get_job(self, job_id: str) -> Optional[ScanJob]:
        with self.jobs_lock:
            return self.jobs.get(job_id)

    def get_job_status(self, job_id: str) -> Optional[Dict[str, Any]]:
        with self.jobs_lock:
            job = self.jobs.get(job_id)
            return job.to_dict() if job else None

    def wait_for(self, job_id: str, timeout: float = 30.0) -> Optional[ScanJob]:
        """Block until the job leaves pending/running or the timeout passes"""
        deadline = time.time() + timeout
        while time.time() < deadline:
            job = self.get_job(job_id)
            if job is None or job.status not in (JobStatus.PENDING, JobStatus.RUNNING):
                return job
            time.sleep(0.01)
        return self.get_job(job_id)

    def _evict_finished_jobs(self):
        """Caller holds jobs_lock"""
        finished = [
            job_id for job_id, job in self.jobs.items()
            if job.status not in (JobStatus.PENDING, JobStatus.RUNNING)
        ]
        while len(self.jobs) >= self.max_jobs and finished:
            del self.jobs[finished.pop(0)]


# Global scan service instance
scan_service = ScanService()

import threading
from contextlib import contextmanager
from functools import wraps

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from models import Base, GovernanceState
import config

# expire_on_commit=False so objects handed out stay readable after commit
SessionLocal = sessionmaker(expire_on_commit=False)
engine = None

# serializes writers inside one process; the state row lock covers the rest
_writer_lock = threading.RLock()
_local = threading.local()


def configure(database_url=None):
    """Bind the session factory to a database, config.DATABASE_URL by default."""
    global engine
    url = database_url or config.DATABASE_URL
    if engine is not None:
        engine.dispose()
    if url.startswith("sqlite"):
        # one shared connection so in-memory databases survive across sessions
        engine = create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    else:
        engine = create_engine(url, pool_pre_ping=True)
    SessionLocal.configure(bind=engine)
    return engine


def init_db(owner=None, database_url=None):
    if engine is None or database_url:
        configure(database_url)
    Base.metadata.create_all(bind=engine)
    # ensure a single state row exists, seeded once with the deployment defaults
    session = SessionLocal()
    s = session.query(GovernanceState).first()
    if not s:
        s = GovernanceState(
            owner=owner or config.OWNER,
            voting_active=False,
            current_round=0,
            voting_start_time=0,
            voting_end_time=0,
            min_vote_threshold=config.MIN_VOTE_THRESHOLD,
            require_registration=config.REQUIRE_REGISTRATION,
            max_candidates_per_round=config.MAX_CANDIDATES_PER_ROUND,
            token_voting=config.TOKEN_VOTING,
            candidate_counter=0,
            proposal_counter=0,
            audit_counter=0,
        )
        session.add(s)
        session.commit()
    session.close()


def drop_db():
    Base.metadata.drop_all(bind=engine)


@contextmanager
def transaction():
    """Run a block as one all-or-nothing unit; nested blocks join the outer one."""
    current = getattr(_local, "session", None)
    if current is not None:
        yield current
        return
    with _writer_lock:
        session = SessionLocal()
        _local.session = session
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            _local.session = None
            session.close()


def atomic(f):
    """Call f(db, *args, **kwargs) inside transaction()."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        with transaction() as db:
            return f(db, *args, **kwargs)
    return wrapper


@contextmanager
def reader():
    """Session for side-effect-free queries; joins an open transaction if any."""
    current = getattr(_local, "session", None)
    if current is not None:
        yield current
        return
    # sqlite shares one connection, so a reader must not interleave with a writer
    with _writer_lock:
        session = SessionLocal()
        try:
            yield session
        finally:
            session.close()


def get_state(db, for_update=False):
    q = db.query(GovernanceState)
    if for_update:
        # every writer takes this row first, which orders writers across processes
        q = q.with_for_update()
    s = q.first()
    if s is None:
        raise RuntimeError("governance state missing; run init_db() first")
    return s

import os, sys, pytest
# Ensure backend directory is on path so 'p2p' and 'seeds' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from p2p import create_app, get_db, release_db
from p2p.models.staff import Base
# Import all model modules to ensure tables are registered before create_all
import p2p.models.requisition  # noqa: F401
import p2p.models.quotation  # noqa: F401
import p2p.models.purchase_order  # noqa: F401
import p2p.models.receipt  # noqa: F401
import p2p.models.quality_check  # noqa: F401
import p2p.models.stock_planning  # noqa: F401
import p2p.models.notification  # noqa: F401


@pytest.fixture(scope='session', autouse=True)
def app_instance():
    os.environ['DATABASE_URL'] = 'sqlite+pysqlite:///:memory:'
    app = create_app({'JWT_SECRET_KEY': 'test-secret-key-with-enough-length-1234'})
    with app.app_context():
        engine = get_db().get_bind()
        Base.metadata.create_all(engine)
    yield app


@pytest.fixture(autouse=True)
def clean_tables(app_instance):
    """Every feed lists all rows, so each test starts from empty tables."""
    yield
    session = get_db()
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    release_db()


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()

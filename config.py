# config.py
import os

# MySQL database configuration
MYSQL_HOST = os.getenv("MYSQL_HOST", "127.0.0.1")
MYSQL_PORT = os.getenv("MYSQL_PORT", "3306")
MYSQL_USER = os.getenv("MYSQL_USER", "root")
MYSQL_PASSWORD = os.getenv("MYSQL_PASSWORD", "root")
MYSQL_DB = os.getenv("MYSQL_DB", "governance_db")

# any SQLAlchemy URL wins over the MySQL settings (tests use sqlite://)
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"mysql+pymysql://{MYSQL_USER}:{MYSQL_PASSWORD}@{MYSQL_HOST}:{MYSQL_PORT}/{MYSQL_DB}",
)

# deployment-time owner identity (secp256k1 public key hex), see deploy.py
OWNER = os.getenv("GOVERNANCE_OWNER")

# governance defaults written into the state row on first deployment
MIN_VOTE_THRESHOLD = int(os.getenv("MIN_VOTE_THRESHOLD", 1))
MAX_CANDIDATES_PER_ROUND = int(os.getenv("MAX_CANDIDATES_PER_ROUND", 20))
REQUIRE_REGISTRATION = os.getenv("REQUIRE_REGISTRATION", "1") == "1"
TOKEN_VOTING = os.getenv("TOKEN_VOTING", "0") == "1"

# hard ceiling of a round's candidate list, independent of the setting above
CANDIDATE_LIST_CAPACITY = 100

# proposal weight = 1 + stake // STAKE_PER_PROPOSAL_WEIGHT
STAKE_PER_PROPOSAL_WEIGHT = 1000

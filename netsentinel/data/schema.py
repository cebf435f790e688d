"""
Canonical schema of network connection records (KDD Cup 1999 layout).

Every dataset file is read against this fixed column layout before feature
engineering. The trailing label column is optional so unlabeled captures can
be classified with the same schema.

Design rationale:
- Column order matches the raw CSV files (no header row)
- Categorical columns are kept apart so recipes can drop or encode them
- Integer and real-valued columns are typed explicitly to catch corrupt rows
"""

from typing import Dict, List

LABEL_COLUMN = "label"

CATEGORICAL_COLUMNS: List[str] = ["protocol_type", "service", "flag"]

# Ordered as in the raw files; dtype names are pandas dtypes.
COLUMN_TYPES: Dict[str, str] = {
    "duration": "int64",
    "protocol_type": "string",
    "service": "string",
    "flag": "string",
    "src_bytes": "int64",
    "dst_bytes": "int64",
    "land": "int64",
    "wrong_fragment": "int64",
    "urgent": "int64",
    "hot": "int64",
    "num_failed_logins": "int64",
    "logged_in": "int64",
    "num_compromised": "int64",
    "root_shell": "int64",
    "su_attempted": "int64",
    "num_root": "int64",
    "num_file_creations": "int64",
    "num_shells": "int64",
    "num_access_files": "int64",
    "num_outbound_cmds": "int64",
    "is_host_login": "int64",
    "is_guest_login": "int64",
    "count": "int64",
    "srv_count": "int64",
    "serror_rate": "float64",
    "srv_serror_rate": "float64",
    "rerror_rate": "float64",
    "srv_rerror_rate": "float64",
    "same_srv_rate": "float64",
    "diff_srv_rate": "float64",
    "srv_diff_host_rate": "float64",
    "dst_host_count": "int64",
    "dst_host_srv_count": "int64",
    "dst_host_same_srv_rate": "float64",
    "dst_host_diff_srv_rate": "float64",
    "dst_host_same_src_port_rate": "float64",
    "dst_host_srv_diff_host_rate": "float64",
    "dst_host_serror_rate": "float64",
    "dst_host_srv_serror_rate": "float64",
    "dst_host_rerror_rate": "float64",
    "dst_host_srv_rerror_rate": "float64",
    LABEL_COLUMN: "string",
}

COLUMN_NAMES: List[str] = list(COLUMN_TYPES)

FEATURE_COLUMNS: List[str] = [c for c in COLUMN_NAMES if c != LABEL_COLUMN]

NUMERIC_COLUMNS: List[str] = [c for c in FEATURE_COLUMNS if c not in CATEGORICAL_COLUMNS]

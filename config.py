import os
from dotenv import load_dotenv

load_dotenv()

# Clustering parameters
DEFAULT_PROXIMITY_RADIUS = 100  # meters
EARTH_RADIUS_METERS = 6371000

# Map settings
MAP_SETTINGS = {
    'default_center': [-2.548926, 118.014863],  # Indonesia
    'default_zoom': 5
}

# Report workflow labels, as stored on the report documents
REPORT_STATUS_LABELS = {
    'pending': 'Menunggu Verifikasi',
    'in_progress': 'Dalam Proses',
    'done': 'Selesai'
}

# Spot repair status
SPOT_STATUS_LABELS = {
    'belum_diperbaiki': 'Belum Diperbaiki',
    'sedang_diperbaiki': 'Sedang Diperbaiki',
    'sudah_diperbaiki': 'Sudah Diperbaiki'
}
DEFAULT_SPOT_STATUS = 'belum_diperbaiki'
UNCATEGORIZED_LABEL = 'Tidak Dikategorikan'

SPOT_MARKER_COLORS = {
    'belum_diperbaiki': 'red',
    'sedang_diperbaiki': 'orange',
    'sudah_diperbaiki': 'green'
}

# Admin accounts
ADMIN_ROLE = 'admin'
MIN_PASSWORD_LENGTH = 6

# File paths
DATA_DIRECTORY = 'static/data'
DATABASE_FILE = f'{DATA_DIRECTORY}/reports.db'


class Config:
    """Application settings, overridable from the environment."""

    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URI', f'sqlite:///{os.path.abspath(DATABASE_FILE)}')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    PROXIMITY_RADIUS_METERS = float(os.getenv('PROXIMITY_RADIUS_METERS', DEFAULT_PROXIMITY_RADIUS))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    TESTING = False

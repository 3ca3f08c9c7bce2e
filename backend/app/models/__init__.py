# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.
# Sans cet import, la FK goodness_records.user_id → users.id échoue
# avec NoReferencedTableError si user.py n'est pas chargé avant goodness_record.py.

from app.models.user import User  # noqa: F401  — doit précéder goodness_record
from app.models.announcement import Announcement  # noqa: F401
from app.models.goodness_record import GoodnessRecord  # noqa: F401

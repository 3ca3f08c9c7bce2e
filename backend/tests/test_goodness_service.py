"""
Tests unitaires pour le service des fiches de bonnes actions.
Couverture : review_record (workflow d'évaluation et crédit de points), create_record,
update_record, list_records.
"""

from datetime import date, datetime
from unittest.mock import MagicMock

import pytest

from app.models.goodness_record import GoodnessRecord
from app.models.user import User
from app.schemas.goodness import GoodnessRecordCreate, GoodnessRecordUpdate, GoodnessReview
from app.services.goodness_service import (
    create_record,
    get_record,
    list_records,
    review_record,
    update_record,
)


# ----------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------

def make_record(status="pending", user_id=7, record_id=1):
    r = MagicMock(spec=GoodnessRecord)
    r.id = record_id
    r.user_id = user_id
    r.description = "Ramassé les déchets dans la cour"
    r.date_performed = date(2024, 1, 1)
    r.image_url = None
    r.status = status
    r.points_awarded = 0
    r.admin_feedback = None
    r.created_at = datetime(2024, 1, 2, 9, 0)
    return r


def make_owner(points=5, user_id=7):
    u = MagicMock(spec=User)
    u.id = user_id
    u.username = "u1"
    u.role = "student"
    u.first_name = "Ploy"
    u.last_name = "Sukjai"
    u.class_level = "M.2/1"
    u.student_number = 12
    u.points = points
    u.created_at = datetime(2024, 1, 1)
    return u


def make_db(record=None, owner=None):
    """DB mock : premier SELECT → fiche, second SELECT → auteur."""
    db = MagicMock()
    db.execute.return_value.scalar_one_or_none.side_effect = [record, owner]
    return db


# ----------------------------------------------------------------
# review_record
# ----------------------------------------------------------------

class TestReviewRecord:
    def test_fiche_introuvable(self):
        db = make_db(record=None)
        result = review_record(db, 99, GoodnessReview(status="approved", points_awarded=10))
        assert result is None
        db.commit.assert_not_called()

    def test_approbation_credite_les_points(self):
        record = make_record()
        owner = make_owner(points=5)
        db = make_db(record, owner)

        result = review_record(db, 1, GoodnessReview(status="approved", points_awarded=10))

        assert result is record
        assert record.status == "approved"
        assert record.points_awarded == 10
        assert owner.points == 15
        db.commit.assert_called_once()
        db.refresh.assert_called_once_with(record)

    def test_approbation_commentaire(self):
        record = make_record()
        db = make_db(record, make_owner())
        review_record(db, 1, GoodnessReview(status="approved", points_awarded=3, admin_feedback="Bravo"))
        assert record.admin_feedback == "Bravo"

    def test_rejet_ne_touche_pas_aux_points(self):
        """Un rejet force pointsAwarded à 0 et ne charge jamais l'auteur."""
        record = make_record()
        owner = make_owner(points=5)
        db = make_db(record, owner)

        review_record(db, 1, GoodnessReview(status="rejected", points_awarded=10, admin_feedback="Pas de preuve"))

        assert record.status == "rejected"
        assert record.points_awarded == 0
        assert owner.points == 5
        assert db.execute.call_count == 1
        db.commit.assert_called_once()

    def test_approbation_sans_points_ne_charge_pas_l_auteur(self):
        record = make_record()
        db = make_db(record, make_owner())
        review_record(db, 1, GoodnessReview(status="approved"))
        assert record.points_awarded == 0
        assert db.execute.call_count == 1

    def test_auteur_introuvable(self):
        """Auteur supprimé : la fiche est approuvée, aucun crédit, pas d'erreur."""
        record = make_record()
        db = make_db(record, None)
        result = review_record(db, 1, GoodnessReview(status="approved", points_awarded=4))
        assert result is record
        assert record.status == "approved"
        db.commit.assert_called_once()

    @pytest.mark.parametrize("status", ["approved", "rejected"])
    def test_fiche_deja_evaluee(self, status):
        """Une fiche déjà évaluée ne peut pas l'être à nouveau (pas de double crédit)."""
        record = make_record(status=status)
        owner = make_owner(points=5)
        db = make_db(record, owner)

        with pytest.raises(ValueError, match="déjà été évaluée"):
            review_record(db, 1, GoodnessReview(status="approved", points_awarded=10))

        assert owner.points == 5
        db.commit.assert_not_called()

    def test_echec_commit_rollback(self):
        """Fiche et solde sont écrits ensemble : un échec annule les deux."""
        record = make_record()
        db = make_db(record, make_owner())
        db.commit.side_effect = RuntimeError("connexion perdue")

        with pytest.raises(RuntimeError):
            review_record(db, 1, GoodnessReview(status="approved", points_awarded=10))

        db.rollback.assert_called_once()

    def test_points_negatifs_refuses(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            GoodnessReview(status="approved", points_awarded=-1)

    def test_statut_invalide_refuse(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            GoodnessReview(status="pending")


# ----------------------------------------------------------------
# create_record / update_record
# ----------------------------------------------------------------

def test_create_record_pending():
    db = MagicMock()
    data = GoodnessRecordCreate(description="  Aidé à ranger la bibliothèque ", date_performed=date(2024, 3, 4))

    record = create_record(db, 7, data)

    assert record.user_id == 7
    assert record.status == "pending"
    assert record.points_awarded == 0
    assert record.description == "Aidé à ranger la bibliothèque"
    db.add.assert_called_once_with(record)
    db.commit.assert_called_once()


def test_create_record_description_vide():
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        GoodnessRecordCreate(description="   ", date_performed=date(2024, 3, 4))


def test_create_record_accepte_camel_case():
    data = GoodnessRecordCreate.model_validate(
        {"description": "Cours de soutien", "datePerformed": "2024-01-01", "imageUrl": "https://img/1.png"}
    )
    assert data.date_performed == date(2024, 1, 1)
    assert data.image_url == "https://img/1.png"


def test_update_record_introuvable():
    db = MagicMock()
    db.get.return_value = None
    assert update_record(db, 5, GoodnessRecordUpdate(description="x")) is None
    db.commit.assert_not_called()


def test_update_record_partiel():
    record = make_record()
    db = MagicMock()
    db.get.return_value = record

    update_record(db, 1, GoodnessRecordUpdate(image_url="https://img/2.png"))

    assert record.image_url == "https://img/2.png"
    assert record.description == "Ramassé les déchets dans la cour"
    db.commit.assert_called_once()


# ----------------------------------------------------------------
# list_records
# ----------------------------------------------------------------

def test_list_records_joint_l_auteur():
    record = make_record()
    owner = make_owner()
    db = MagicMock()
    db.execute.return_value.all.return_value = [(record, owner)]

    result = list_records(db, user_id=7)

    assert len(result) == 1
    assert result[0].user is not None
    assert result[0].user.username == "u1"
    dumped = result[0].model_dump(by_alias=True)
    assert "password" not in dumped["user"]


def test_list_records_auteur_absent_omis():
    """Jointure gauche : sans auteur, la clé user est absente de la réponse."""
    db = MagicMock()
    db.execute.return_value.all.return_value = [(make_record(), None)]

    result = list_records(db)

    assert result[0].user is None
    assert "user" not in result[0].model_dump(by_alias=True)


def test_get_record():
    record = make_record()
    db = MagicMock()
    db.get.return_value = record
    assert get_record(db, 1) is record
    db.get.assert_called_once_with(GoodnessRecord, 1)

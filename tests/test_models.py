"""Tests for record models and partial-update data."""

from __future__ import annotations

from pygta.models import Element, GtaPeriode, Login, PersonnelDeclaration, Semaine, Structure, coerce_record


class TestPatchData:
    def test_only_supplied_fields(self) -> None:
        personnel = PersonnelDeclaration.model_validate({"id": 4, "prenom": "Léa"})

        assert personnel.patch_data() == {"id": 4, "prenom": "Léa"}

    def test_extra_fields_are_part_of_patch(self) -> None:
        element = Element.model_validate({"id": 1, "libelle": "Planning", "actif": False})

        assert element.patch_data() == {"id": 1, "libelle": "Planning", "actif": False}

    def test_defaults_are_not_part_of_patch(self) -> None:
        structure = Structure(id=2)

        assert structure.name is None
        assert structure.patch_data() == {"id": 2}


class TestGtaPeriode:
    def test_foreign_key_alias(self) -> None:
        periode = GtaPeriode.model_validate(
            {"id": 1, "structure__personnel_id": 10, "dd": "2024-01-01", "df": None}
        )

        assert periode.structure_personnel_id == 10
        assert periode.dd == "2024-01-01"
        assert periode.df is None
        assert periode.model_dump(by_alias=True)["structure__personnel_id"] == 10

    def test_populate_by_field_name(self) -> None:
        periode = GtaPeriode(id=1, structure_personnel_id=10)

        assert periode.structure_personnel_id == 10

    def test_nested_periods_are_models(self) -> None:
        personnel = PersonnelDeclaration.model_validate(
            {"id": 10, "gta_periodes": [{"id": 1, "structure__personnel_id": 10}]}
        )

        assert isinstance(personnel.gta_periodes[0], GtaPeriode)


def test_ids_keep_their_type() -> None:
    assert Element(id="5").id == "5"
    assert Element(id=5).id == 5


def test_semaine_week_key() -> None:
    assert Semaine.model_validate({"week": 12, "heures": 35.5}).heures == 35.5


def test_login_is_opaque() -> None:
    login = Login.model_validate({"login": "jdoe", "roles": ["admin"]})

    assert login.id is None
    assert login.roles == ["admin"]


def test_coerce_record_keeps_instances() -> None:
    element = Element(id=1)

    assert coerce_record(Element, element) is element
    assert coerce_record(Element, {"id": 2}).id == 2


class TestLooseFields:
    def test_null_and_numeric_values_are_accepted(self) -> None:
        personnel = PersonnelDeclaration.model_validate({"id": 1, "nom": None, "prenom": 7})
        structure = Structure.model_validate({"id": 1, "name": None})
        login = Login.model_validate({"login": 42})

        assert personnel.nom is None
        assert personnel.prenom == 7
        assert structure.name is None
        assert login.login == 42

    def test_period_dates_kept_as_received(self) -> None:
        periode = GtaPeriode.model_validate(
            {"id": 2, "structure__personnel_id": 1, "dd": "2024-01-01T08:30:00", "df": ""}
        )

        assert periode.dd == "2024-01-01T08:30:00"
        assert periode.df == ""

"""
Tests for customer input validation.
"""
import pytest
from pydantic import ValidationError

from ferreteria.v1_0.schemas import CustomerCreate, CustomerUpdate


def _payload(**overrides):
    data = {
        "name": "Ferretería El Tornillo",
        "phone": "04121234567",
        "email": "compras@eltornillo.com",
        "address": "Av. Bolívar, local 3",
        "municipality": "Libertador",
        "rif": "J123456789",
        "categories": ["Agente Retención"],
        "municipality_color": "#1e88e5",
    }
    data.update(overrides)
    return data


def _failed_fields(exc):
    return {err["loc"][0] for err in exc.value.errors()}


class TestCustomerCreate:
    """Format rules on create."""

    def test_valid_payload(self):
        c = CustomerCreate(**_payload())
        assert c.rif == "J123456789"
        assert c.categories == ["Agente Retención"]

    @pytest.mark.parametrize("rif", ["V12345678", "E123456789", "J12345678", "G000000001"])
    def test_accepts_rif(self, rif):
        assert CustomerCreate(**_payload(rif=rif)).rif == rif

    @pytest.mark.parametrize("rif", ["X12345678", "J1234567", "J1234567890", "j12345678", "J-12345678"])
    def test_rejects_rif(self, rif):
        with pytest.raises(ValidationError) as exc:
            CustomerCreate(**_payload(rif=rif))
        assert _failed_fields(exc) == {"rif"}

    @pytest.mark.parametrize("phone", ["0412123456", "041212345678", "0412-123456", "phone123456"])
    def test_rejects_phone(self, phone):
        with pytest.raises(ValidationError) as exc:
            CustomerCreate(**_payload(phone=phone))
        assert _failed_fields(exc) == {"phone"}

    def test_trims_text_fields(self):
        c = CustomerCreate(**_payload(name="  Ferretería  ", municipality=" Sucre ", address=" Calle 5 "))
        assert c.name == "Ferretería"
        assert c.municipality == "Sucre"
        assert c.address == "Calle 5"

    @pytest.mark.parametrize("phone", [" 04121234567", "04121234567 ", "04121234567\n"])
    def test_rejects_padded_phone(self, phone):
        with pytest.raises(ValidationError) as exc:
            CustomerCreate(**_payload(phone=phone))
        assert _failed_fields(exc) == {"phone"}

    @pytest.mark.parametrize("rif", [" J123456789", "V12345678\n", "V12345678 "])
    def test_rejects_padded_rif(self, rif):
        with pytest.raises(ValidationError) as exc:
            CustomerCreate(**_payload(rif=rif))
        assert _failed_fields(exc) == {"rif"}

    def test_rejects_non_string_phone(self):
        with pytest.raises(ValidationError) as exc:
            CustomerCreate(**_payload(phone=4121234567))
        assert _failed_fields(exc) == {"phone"}

    def test_accepts_plus_addressing(self):
        c = CustomerCreate(**_payload(email="compras+ferre@eltornillo.com"))
        assert c.email == "compras+ferre@eltornillo.com"

    def test_rejects_special_use_email_domain(self):
        with pytest.raises(ValidationError) as exc:
            CustomerCreate(**_payload(email="ventas@tienda.local"))
        assert _failed_fields(exc) == {"email"}

    def test_email_is_optional_and_lowercased(self):
        assert CustomerCreate(**_payload(email="")).email is None
        assert CustomerCreate(**_payload(email=None)).email is None
        assert CustomerCreate(**_payload(email="Compras@ElTornillo.COM")).email == "compras@eltornillo.com"

    def test_rejects_email(self):
        with pytest.raises(ValidationError) as exc:
            CustomerCreate(**_payload(email="compras@eltornillo"))
        assert _failed_fields(exc) == {"email"}

    @pytest.mark.parametrize("color", ["#fff", "#A1B2C3"])
    def test_accepts_hex_color(self, color):
        assert CustomerCreate(**_payload(municipality_color=color)).municipality_color == color

    @pytest.mark.parametrize("color", ["red", "#12345", "1e88e5", "#ggg"])
    def test_rejects_color(self, color):
        with pytest.raises(ValidationError) as exc:
            CustomerCreate(**_payload(municipality_color=color))
        assert _failed_fields(exc) == {"municipality_color"}

    def test_default_color(self):
        data = _payload()
        del data["municipality_color"]
        assert CustomerCreate(**data).municipality_color == "#ffffff"

    def test_categories_are_a_closed_set(self):
        with pytest.raises(ValidationError) as exc:
            CustomerCreate(**_payload(categories=["VIP"]))
        assert _failed_fields(exc) == {"categories"}

    def test_categories_are_deduplicated(self):
        c = CustomerCreate(**_payload(categories=["Alto Riesgo", "Agente Retención", "Alto Riesgo"]))
        assert c.categories == ["Alto Riesgo", "Agente Retención"]

    @pytest.mark.parametrize("field", ["name", "phone", "municipality", "rif"])
    def test_required_fields(self, field):
        data = _payload()
        del data[field]
        with pytest.raises(ValidationError) as exc:
            CustomerCreate(**data)
        assert field in _failed_fields(exc)


class TestCustomerUpdate:
    """Same rules, every field optional."""

    def test_empty_update(self):
        assert CustomerUpdate().model_dump(exclude_unset=True) == {}

    def test_only_set_fields_are_dumped(self):
        u = CustomerUpdate(municipality_color="#000")
        assert u.model_dump(exclude_unset=True) == {"municipality_color": "#000"}

    def test_rejects_bad_rif(self):
        with pytest.raises(ValidationError) as exc:
            CustomerUpdate(rif="Z123")
        assert _failed_fields(exc) == {"rif"}

    def test_rejects_bad_phone(self):
        with pytest.raises(ValidationError):
            CustomerUpdate(phone="123")

    def test_rejects_padded_rif(self):
        with pytest.raises(ValidationError) as exc:
            CustomerUpdate(rif="J123456789 ")
        assert _failed_fields(exc) == {"rif"}

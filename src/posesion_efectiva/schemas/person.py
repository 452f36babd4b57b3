"""
Person schemas: decedent (causante), applicant, legal representative and heirs.

Field names follow the JSON keys produced by the front-end form.
"""

from .base import FormModel, Scalar


class PersonaBase(FormModel):
    """Name parts and national ID shared by every person on the form."""
    rut: Scalar = None
    nombres: Scalar = None
    primer_apellido: Scalar = None
    segundo_apellido: Scalar = None

    @property
    def nombre_completo(self) -> str:
        """Space-joined non-empty name parts."""
        parts = (self.nombres, self.primer_apellido, self.segundo_apellido)
        return " ".join(str(part) for part in parts if part not in (None, ""))


class Causante(PersonaBase):
    """The deceased person."""
    fecha_nacimiento: Scalar = None
    fecha_defuncion: Scalar = None
    estado_civil: Scalar = None
    nacionalidad: Scalar = None
    actividad: Scalar = None


class Contacto(PersonaBase):
    """Address and contact details of the applicant or representative."""
    calle: Scalar = None
    numero_calle: Scalar = None
    letra: Scalar = None
    resto_domicilio: Scalar = None
    comuna: Scalar = None
    region: Scalar = None
    correo: Scalar = None
    telefono: Scalar = None
    # "1" chilean (RUN), "2" foreign (RUT)
    nacionalidad: Scalar = None


class Solicitante(Contacto):
    """Person filing the declaration."""
    medio_contacto: Scalar = None


class Representante(Contacto):
    """Legal representative, plus the instrument granting the representation."""
    tipo: Scalar = None
    cesionario: Scalar = None
    documento_fundante: Scalar = None
    fecha_doc: Scalar = None
    autorizante: Scalar = None


class Heredero(PersonaBase):
    """An heir listed in the heirs section."""
    fecha_nacimiento: Scalar = None
    fecha_defuncion: Scalar = None
    calidad: Scalar = None
    run_representacion: Scalar = None
    domicilio: Scalar = None
    comuna: Scalar = None
    region: Scalar = None
    cedente: Scalar | bool = None


class PartidaDefuncion(FormModel):
    """Death-registry record."""
    circunscripcion: Scalar = None
    tipo_registro: Scalar = None
    ano: Scalar = None
    n_inscripcion: Scalar = None
    lugar_defuncion: Scalar = None


class DomicilioCausante(FormModel):
    """Decedent's last domicile."""
    calle: Scalar = None
    numero: Scalar = None
    letra: Scalar = None
    resto: Scalar = None
    comuna: Scalar = None
    region: Scalar = None


# fittrack/forms/profile_form.py

from wtforms import BooleanField, IntegerField, StringField
from wtforms.validators import AnyOf, Email, Length, NumberRange, Optional

from fittrack.forms.auth_form import ApiForm


class ProfileForm(ApiForm):
    email = StringField(
        "Email",
        validators=[Optional(), Email(message="Email inválido")],
    )
    first_name = StringField("Nombre", validators=[Optional(), Length(max=80)])
    last_name = StringField("Apellidos", validators=[Optional(), Length(max=80)])
    gender = StringField(
        "Sexo",
        validators=[Optional(), AnyOf(("male", "female", "other"), message="gender inválido")],
    )
    age = IntegerField(
        "Edad",
        validators=[Optional(), NumberRange(min=10, max=120, message="Introduce una edad entre 10 y 120.")],
    )
    fitness_level = StringField(
        "Nivel",
        validators=[Optional(), AnyOf(("beginner", "intermediate", "advanced"), message="fitness_level inválido")],
    )
    fitness_goals = StringField("Objetivos", validators=[Optional(), Length(max=255)])
    preferred_workout_days = StringField("Días preferidos", validators=[Optional(), Length(max=120)])
    workout_reminders = BooleanField("Recordatorios")

    def changes(self, sent: dict) -> dict:
        """Solo los campos que el cliente ha enviado (PUT parcial)."""
        return {name: self[name].data for name in sent if name in self._fields}

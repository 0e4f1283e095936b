# fittrack/forms/auth_form.py

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField
from wtforms.validators import DataRequired, Length


class ApiForm(FlaskForm):
    """Base para formularios que llegan como JSON desde el front (cookie SameSite=Lax)."""

    class Meta:
        csrf = False

    def first_error(self) -> str:
        for field, errors in self.errors.items():
            if errors:
                return f"{field}: {errors[0]}"
        return "Datos inválidos"


class LoginForm(ApiForm):
    username = StringField(
        "Usuario",
        validators=[DataRequired(message="El usuario es obligatorio")]
    )
    password = PasswordField(
        "Contraseña",
        validators=[DataRequired(message="La contraseña es obligatoria")]
    )


class RegisterForm(ApiForm):
    username = StringField(
        "Usuario",
        validators=[
            DataRequired(message="El usuario es obligatorio"),
            Length(min=3, max=80, message="El usuario debe tener entre 3 y 80 caracteres"),
        ],
    )
    password = PasswordField(
        "Contraseña",
        validators=[
            DataRequired(message="La contraseña es obligatoria"),
            Length(min=6, message="La contraseña debe tener al menos 6 caracteres"),
        ],
    )

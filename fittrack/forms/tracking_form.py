# fittrack/forms/tracking_form.py

from wtforms import IntegerField, StringField
from wtforms.validators import DataRequired, Length, NumberRange, Optional, AnyOf

from fittrack.forms.auth_form import ApiForm


class WorkoutForm(ApiForm):
    title = StringField("Título", validators=[DataRequired(message="title es obligatorio"), Length(max=160)])
    subtitle = StringField("Subtítulo", validators=[Optional(), Length(max=160)])
    description = StringField("Descripción", validators=[Optional()])
    image_url = StringField("Imagen", validators=[Optional(), Length(max=500)])
    duration = IntegerField(
        "Duración (min)",
        validators=[DataRequired(message="duration es obligatorio"), NumberRange(min=1, message="duration debe ser > 0")],
    )
    difficulty = StringField(
        "Dificultad",
        validators=[DataRequired(message="difficulty es obligatorio"), AnyOf(("easy", "medium", "hard"))],
    )
    type = StringField("Tipo", validators=[DataRequired(message="type es obligatorio"), Length(max=32)])
    day = IntegerField("Día", validators=[Optional(), NumberRange(min=1)])
    total_days = IntegerField("Total días", validators=[Optional(), NumberRange(min=1)])


class ProgressTestForm(ApiForm):
    title = StringField("Título", validators=[DataRequired(message="title es obligatorio"), Length(max=160)])
    description = StringField("Descripción", validators=[Optional()])
    result = StringField("Resultado", validators=[Optional(), Length(max=255)])

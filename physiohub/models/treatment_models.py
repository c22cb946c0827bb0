from datetime import datetime
from physiohub.extensions import db

DEFAULT_TIMING = 'Custom assigned'
DEFAULT_PROGRESSION = 'Individual progression'

# Starting catalogue seeded by `flask init-db`
DEFAULT_EXERCISES = [
    {
        'name': 'Knee Extension',
        'description': 'Sit tall on a chair and slowly straighten one knee, hold, then lower.',
        'illustration_sequence': 'knee_extension',
        'timer': False,
    },
    {
        'name': 'Hamstring Stretch',
        'description': 'Rest your heel on a low step and lean forward from the hips until you feel a stretch.',
        'illustration_sequence': 'hamstring_stretch',
        'timer': True,
    },
    {
        'name': 'Shoulder Pendulum',
        'description': 'Lean on a table and let the affected arm hang, swinging it in small circles.',
        'illustration_sequence': 'shoulder_pendulum',
        'timer': True,
    },
    {
        'name': 'Calf Raise',
        'description': 'Stand holding a support and rise onto your toes, then lower slowly.',
        'illustration_sequence': 'calf_raise',
        'timer': False,
    },
    {
        'name': 'Plank',
        'description': 'Hold a straight line from head to heels on your forearms and toes.',
        'illustration_sequence': 'plank',
        'timer': True,
    },
]


class Exercise(db.Model):
    """Catalogue entry a therapist can prescribe."""
    __tablename__ = 'exercises'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    illustration_sequence = db.Column(db.String(100))  # template / illustration reference
    timer = db.Column(db.Boolean, nullable=False, default=False)

    def __repr__(self):
        return f'<Exercise {self.id} {self.name}>'


class Treatment(db.Model):
    """One assignment episode. Append-only; linked by health identifier."""
    __tablename__ = 'ongoing_treatment'

    id = db.Column(db.Integer, primary_key=True)
    nhs_number = db.Column(db.String(10), nullable=False, index=True)
    timing = db.Column(db.String(100), default=DEFAULT_TIMING)
    progression = db.Column(db.String(100), default=DEFAULT_PROGRESSION)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    exercises = db.relationship(
        'TreatmentExercise',
        back_populates='treatment',
        order_by='TreatmentExercise.order_num',
        cascade='all, delete-orphan'
    )


class TreatmentExercise(db.Model):
    """An exercise prescribed within a treatment, in display order."""
    __tablename__ = 'treatment_exercise'
    __table_args__ = (
        db.UniqueConstraint('treatment_id', 'order_num', name='uq_treatment_exercise_order'),
    )

    id = db.Column(db.Integer, primary_key=True)
    treatment_id = db.Column(db.Integer, db.ForeignKey('ongoing_treatment.id'), nullable=False, index=True)
    exercise_id = db.Column(db.Integer, db.ForeignKey('exercises.id'), nullable=False)
    order_num = db.Column(db.Integer, nullable=False)
    prescription = db.Column(db.JSON, nullable=False)  # {"duration", "reps", "perWeek"}

    treatment = db.relationship('Treatment', back_populates='exercises')
    exercise = db.relationship('Exercise')

    @property
    def instructions(self):
        p = self.prescription
        return (f"Perform for a duration/reps of {p['duration']} in {p['reps']} sets, "
                f"for {p['perWeek']} sessions per week.")

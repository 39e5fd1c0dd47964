"""Demo ICU patients seeded into a fresh dashboard."""

from icu_monitor.domain.models import PatientProfile

DEMO_PATIENTS: tuple[PatientProfile, ...] = (
    PatientProfile(
        patient_code="ICU-001",
        name="John Anderson",
        age=65,
        gender="Male",
        blood_type="O+",
        room_number="ICU-101",
        diagnosis="Acute Respiratory Distress Syndrome (ARDS)",
        doctor_name="Dr. Sarah Mitchell",
    ),
    PatientProfile(
        patient_code="ICU-002",
        name="Maria Rodriguez",
        age=58,
        gender="Female",
        blood_type="A+",
        room_number="ICU-102",
        diagnosis="Septic Shock",
        doctor_name="Dr. Michael Chen",
    ),
    PatientProfile(
        patient_code="ICU-003",
        name="Robert Thompson",
        age=72,
        gender="Male",
        blood_type="B-",
        room_number="ICU-103",
        diagnosis="Myocardial Infarction",
        doctor_name="Dr. Sarah Mitchell",
    ),
    PatientProfile(
        patient_code="ICU-004",
        name="Emily Watson",
        age=45,
        gender="Female",
        blood_type="AB+",
        room_number="ICU-104",
        diagnosis="Traumatic Brain Injury",
        doctor_name="Dr. James Wilson",
    ),
)


def find_patient(patient_code: str) -> PatientProfile | None:
    return next((p for p in DEMO_PATIENTS if p.patient_code == patient_code), None)

import app.db as app_db
from app.config import get_settings
from app.services.risk_service import create_risk_assessment

DEMO_RISKS = [
    {
        "hazard_type": "Brannfare ved frityrkoker",
        "hazard_description": "Overopphetet olje kan antennes.",
        "likelihood": 2,
        "consequence": 5,
        "preventive_measures": "Fast oljeskift, brannteppe ved stasjonen.",
        "responsible_person": "Kjøkkensjef",
    },
    {
        "hazard_type": "Kuttskader",
        "hazard_description": "Kniver og kjøkkenmaskiner.",
        "likelihood": 4,
        "consequence": 2,
        "preventive_measures": "Kuttsikre hansker, opplæring.",
        "responsible_person": "Skiftleder",
        "status": "In Progress",
    },
    {
        "hazard_type": "Glatt gulv",
        "hazard_description": "Vann og fett ved oppvask.",
        "likelihood": 3,
        "consequence": 3,
        "preventive_measures": "Sklisikre matter og tørkerutine.",
        "responsible_person": "Daglig leder",
    },
]


def main():
    app_db.configure_database(get_settings().database_url)
    app_db.init_db()
    with app_db.SessionLocal() as db:
        for item in DEMO_RISKS:
            row = create_risk_assessment(db, item)
            print(f"Seeded: {row.id} - {row.hazard_type} ({row.risk_score} {row.risk_level})")


if __name__ == "__main__":
    main()

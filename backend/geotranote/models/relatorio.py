# backend/geotranote/models/relatorio.py

from datetime import datetime

from geotranote.extensions import db


class Relatorio(db.Model):
    __tablename__ = "reports"

    # UUID gerado no cliente antes do insert (as infrações já nascem vinculadas)
    id = db.Column(db.String(36), primary_key=True)

    responsible_name = db.Column(db.String(150), nullable=True)

    service_name = db.Column(
        db.Enum("ordinario", "operacao", "ras", name="service_name_enum"),
        nullable=False,
        index=True,
    )

    sector = db.Column(db.String(60), nullable=False)

    car_removals = db.Column(db.Integer, nullable=False, default=0)
    motorcycle_removals = db.Column(db.Integer, nullable=False, default=0)
    total_approaches = db.Column(db.Integer, nullable=False, default=0)

    protocol_number = db.Column(db.String(32), unique=True, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    infracoes = db.relationship(
        "Infracao",
        back_populates="relatorio",
        lazy="select",
    )

    __table_args__ = (
        db.CheckConstraint("car_removals >= 0", name="ck_reports_car_removals"),
        db.CheckConstraint("motorcycle_removals >= 0", name="ck_reports_motorcycle_removals"),
        db.CheckConstraint("total_approaches >= 0", name="ck_reports_total_approaches"),
    )

    def __repr__(self) -> str:
        return f"<Relatorio id={self.id} protocolo={self.protocol_number} setor={self.sector}>"

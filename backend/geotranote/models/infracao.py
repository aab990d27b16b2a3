from geotranote.extensions import db


class Infracao(db.Model):
    __tablename__ = "infractions"

    id = db.Column(db.String(36), primary_key=True)

    infraction_type = db.Column(db.String(255), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)

    # Nulo apenas em linhas antigas gravadas antes do vínculo com o relatório
    report_id = db.Column(
        db.String(36),
        db.ForeignKey("reports.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    relatorio = db.relationship("Relatorio", back_populates="infracoes")

    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_infractions_quantity"),
    )

    def __repr__(self) -> str:
        return f"<Infracao id={self.id} tipo={self.infraction_type} qtd={self.quantity}>"

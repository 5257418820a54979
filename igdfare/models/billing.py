import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from igdfare.models.ambulance import TariffBreakdown


class BillingCategory(str, Enum):
    PERAWATAN_KAMAR = "PERAWATAN_KAMAR"
    ALAT_TINDAKAN_PARAMEDIS = "ALAT_TINDAKAN_PARAMEDIS"
    KAMAR_OPERASI = "KAMAR_OPERASI"
    PEMERIKSAAN_UGD = "PEMERIKSAAN_UGD"
    VISITE_DOKTER = "VISITE_DOKTER"
    KONSUL_DOKTER = "KONSUL_DOKTER"
    BHP_OBAT_ALKES = "BHP_OBAT_ALKES"
    PENUNJANG = "PENUNJANG"
    RESUME_MEDIS = "RESUME_MEDIS"
    VISUM_MEDIS = "VISUM_MEDIS"
    AMBULANCE = "AMBULANCE"
    ADMINISTRASI = "ADMINISTRASI"
    LAINNYA = "LAINNYA"


# Section headings and numbering used on printed bills
BILLING_SECTIONS = {
    BillingCategory.PERAWATAN_KAMAR: (1, "PERAWATAN/KAMAR"),
    BillingCategory.ALAT_TINDAKAN_PARAMEDIS: (2, "ALAT & TINDAKAN PARAMEDIS"),
    BillingCategory.KAMAR_OPERASI: (3, "KAMAR OPERASI"),
    BillingCategory.PEMERIKSAAN_UGD: (4, "PEMERIKSAAN DI UGD"),
    BillingCategory.VISITE_DOKTER: (5, "VISITE DOKTER"),
    BillingCategory.KONSUL_DOKTER: (6, "KONSUL DOKTER"),
    BillingCategory.BHP_OBAT_ALKES: (7, "BHP (OBAT & ALKES)"),
    BillingCategory.PENUNJANG: (8, "PENUNJANG (LAB, RO, USG, ECG, dll.)"),
    BillingCategory.RESUME_MEDIS: (9, "RESUME MEDIS"),
    BillingCategory.VISUM_MEDIS: (10, "VISUM MEDIS"),
    BillingCategory.AMBULANCE: (11, "AMBULANCE"),
    BillingCategory.ADMINISTRASI: (12, "ADMINISTRASI"),
    BillingCategory.LAINNYA: (99, "LAINNYA"),
}


class VisitService(BaseModel):
    """A billing line item attached to a visit."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    nama: str = Field(..., description="Line item description")
    harga: Decimal = Field(..., ge=0, description="Unit price")
    quantity: int = Field(1, ge=1)
    category: BillingCategory = Field(BillingCategory.LAINNYA)
    unit: Optional[str] = None
    total: Decimal = Field(..., ge=0)
    notes: Optional[str] = None
    ambulance_meta: Optional[TariffBreakdown] = Field(None, alias="ambulanceMeta")

    class Config:
        populate_by_name = True
        use_enum_values = True

    @property
    def section(self) -> str:
        number, label = BILLING_SECTIONS[BillingCategory(self.category)]
        return f"{number}. {label}"

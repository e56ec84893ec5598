# backend/leadscope/models.py
"""
SQLAlchemy ORM models.

Only the lead record lives here; the enrichment engine itself is stateless
and writes its fused profile back onto the lead as JSON.
"""

from sqlalchemy import Column, String, Boolean, Integer, Text, DateTime, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from leadscope.database import Base


JSONType = JSON().with_variant(JSONB, "postgresql")


class Lead(Base):
    """Prospective customer record (company + contact)."""
    __tablename__ = "leads"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    
    # ========================================================================
    # CONTACT INFO
    # ========================================================================
    company_name = Column(String(255), nullable=False, index=True)
    contact_name = Column(String(255), nullable=False)
    job_title = Column(String(255), nullable=False)
    email = Column(String(255))
    phone = Column(String(50))
    
    # ========================================================================
    # COMPANY INFO
    # ========================================================================
    industry = Column(String(255), nullable=False, default="")
    location = Column(String(255), nullable=False, default="")
    company_size = Column(String(50), nullable=False, default="Unknown")
    employee_count = Column(Integer)
    website = Column(String(500))
    tech_stack = Column(JSONType, default=list)
    funding_info = Column(String(255))
    recent_activity = Column(Text)
    
    # ========================================================================
    # SCORING
    # ========================================================================
    score = Column(Integer, nullable=False, default=0)
    priority = Column(String(20), nullable=False, default="cold")  # hot, warm, cold
    
    # ========================================================================
    # ENRICHMENT DATA
    # ========================================================================
    is_enriched = Column(Boolean, nullable=False, default=False)
    enrichment_data = Column(JSONType)  # Last fused EnrichedProfile, replaced wholesale
    enriched_at = Column(DateTime(timezone=True))
    
    # ========================================================================
    # TIMESTAMPS
    # ========================================================================
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    def __repr__(self):
        return f"<Lead(id={self.id}, company='{self.company_name}', score={self.score})>"

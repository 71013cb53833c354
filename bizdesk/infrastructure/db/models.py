"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean,
    Numeric, ForeignKey, Index
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from bizdesk.infrastructure.db.database import Base


class ClientModel(Base):
    """Client table"""
    __tablename__ = 'clients'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255))

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    projects = relationship("ProjectModel", back_populates="client")
    invoices = relationship("InvoiceModel", back_populates="client")


class ProjectModel(Base):
    """Project table"""
    __tablename__ = 'projects'

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey('clients.id', ondelete='SET NULL'))
    name = Column(String(255), nullable=False)
    description = Column(Text)
    status = Column(String(20), nullable=False, default='active')
    start_date = Column(DateTime)
    end_date = Column(DateTime)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    client = relationship("ClientModel", back_populates="projects")
    tasks = relationship("TaskModel", back_populates="project")
    invoices = relationship("InvoiceModel", back_populates="project")

    __table_args__ = (
        Index('idx_projects_client', 'client_id'),
        Index('idx_projects_status', 'status'),
    )


class TaskModel(Base):
    """Task table"""
    __tablename__ = 'tasks'

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='SET NULL'))
    title = Column(String(255), nullable=False)
    description = Column(Text)
    status = Column(String(20), nullable=False, default='pending')
    priority = Column(String(20), nullable=False, default='medium')
    due_date = Column(DateTime)
    comments = Column(Text)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    project = relationship("ProjectModel", back_populates="tasks")
    time_entries = relationship("TimeEntryModel", back_populates="task", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_tasks_project', 'project_id'),
        Index('idx_tasks_status', 'status'),
    )


class TimeEntryModel(Base):
    """Time entry table"""
    __tablename__ = 'time_entries'

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(Integer, ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False)
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='SET NULL'))
    description = Column(Text)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime)
    duration = Column(Integer)  # minutes
    is_billable = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    task = relationship("TaskModel", back_populates="time_entries")
    project = relationship("ProjectModel")

    __table_args__ = (
        Index('idx_time_entries_task', 'task_id'),
        Index('idx_time_entries_running', 'end_time'),
    )


class InvoiceModel(Base):
    """Invoice table"""
    __tablename__ = 'invoices'

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey('clients.id'), nullable=False)
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='SET NULL'))

    # Invoice details
    invoice_number = Column(String(50), nullable=False, unique=True)
    status = Column(String(20), nullable=False, default='draft')

    # Amounts
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    tax = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    total = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)

    # Dates
    issue_date = Column(DateTime, nullable=False)
    due_date = Column(DateTime)
    sent_date = Column(DateTime)
    paid_date = Column(DateTime)

    notes = Column(Text)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    client = relationship("ClientModel", back_populates="invoices")
    project = relationship("ProjectModel", back_populates="invoices")
    items = relationship(
        "InvoiceItemModel",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItemModel.id"
    )

    __table_args__ = (
        Index('idx_invoices_client', 'client_id'),
        Index('idx_invoices_status', 'status'),
    )


class InvoiceItemModel(Base):
    """Invoice item table"""
    __tablename__ = 'invoice_items'

    id = Column(Integer, primary_key=True, autoincrement=True)
    invoice_id = Column(Integer, ForeignKey('invoices.id', ondelete='CASCADE'), nullable=False)

    # Weak references, kept when the project or task goes away
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='SET NULL'))
    task_id = Column(Integer, ForeignKey('tasks.id', ondelete='SET NULL'))

    description = Column(String(500), nullable=False)
    quantity = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=1)
    unit_price = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    hours_worked = Column(Numeric(8, 2, asdecimal=False))
    rate_per_hour = Column(Numeric(10, 2, asdecimal=False))
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    invoice = relationship("InvoiceModel", back_populates="items")
    project = relationship("ProjectModel")
    task = relationship("TaskModel")

    __table_args__ = (
        Index('idx_invoice_items_invoice', 'invoice_id'),
    )

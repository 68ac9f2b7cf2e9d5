"""
Lead pipeline operations.
"""

from bizdesk.errors import NotFoundError
from bizdesk.models import LeadInput

from .base import HandlerGroup, operation, payload_id, rows


class LeadsHandler(HandlerGroup):
    """Operations for sales leads and their activity log."""

    @operation("save-lead", "lead-saved")
    def save_lead(self, payload):
        return self.repository.leads.create(LeadInput.from_payload(payload)).to_dict()

    @operation("get-leads", "leads-data")
    def get_leads(self, payload):
        business_id = payload_id(payload, "business_id")
        return rows(self.repository.leads.list_by_business(business_id))

    @operation("get-lead-by-id", "lead-data")
    def get_lead_by_id(self, payload):
        lead_id = payload_id(payload)
        lead = self.repository.leads.get_by_id(lead_id)
        if lead is None:
            raise NotFoundError("Lead", lead_id)
        return lead.to_dict()

    @operation("update-lead", "lead-updated")
    def update_lead(self, payload):
        lead = LeadInput.from_payload(payload, require_id=True)
        return self.repository.leads.update(lead).to_dict()

    @operation("delete-lead", "lead-deleted")
    def delete_lead(self, payload):
        lead_id = payload_id(payload)
        return {"id": lead_id, "deleted": self.repository.leads.delete(lead_id)}

    @operation("get-lead-activities", "lead-activities-data")
    def get_lead_activities(self, payload):
        return rows(self.repository.leads.get_activities(payload_id(payload)))

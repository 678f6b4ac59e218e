# Automatically load all models so metadata knows them
from app.models.house_model import House
from app.models.tenant_model import Tenant
from app.models.charge_model import Charge
from app.models.payment_model import Payment
from app.models.payment_charge_model import PaymentCharge
from app.models.maintenance_request_model import MaintenanceRequest

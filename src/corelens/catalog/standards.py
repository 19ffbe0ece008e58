"""Default SAP standards data: BAPIs, transactions and patterns.

Plain data only. ``default_catalog()`` in the repository module wraps these
tuples in an immutable StandardsCatalog.
"""

from corelens.catalog.entries import CatalogEntry, EntryKind
from corelens.corpus.base import Module


def _entry(id, kind, module, description, use_cases, related=(), name=None, doc_url=None):
    return CatalogEntry(
        id=id,
        kind=kind,
        name=name or id,
        module=module,
        description=description,
        use_cases=tuple(use_cases),
        related_resources=tuple(related),
        clean_core_compliant=True,
        doc_url=doc_url,
    )


# ---------------------------------------------------------------------------
# Interfaces (BAPIs)
# ---------------------------------------------------------------------------

INTERFACES = (
    _entry(
        "BAPI_SALESORDER_CREATEFROMDAT2", EntryKind.INTERFACE, Module.SD,
        "Create sales order from data",
        ["Create sales orders programmatically", "Order entry automation",
         "Integration with external systems", "Batch order creation"],
        ["VBAK", "VBAP", "VBPA"],
        doc_url="https://help.sap.com/doc/saphelp_nw75/7.5.5/en-US/9f/db9c3c48c11d1f9f5e0000e8322d00/content.htm",
    ),
    _entry(
        "BAPI_SALESORDER_CHANGE", EntryKind.INTERFACE, Module.SD,
        "Change existing sales order",
        ["Update order quantities", "Change delivery dates", "Modify pricing",
         "Update partner information"],
        ["VBAK", "VBAP"],
    ),
    _entry(
        "BAPI_SALESORDER_SIMULATE", EntryKind.INTERFACE, Module.SD,
        "Simulate sales order without saving",
        ["Price simulation", "Availability check", "Credit limit check",
         "What-if analysis"],
        ["VBAK", "VBAP", "KONV"],
    ),
    _entry(
        "BAPI_PO_CREATE1", EntryKind.INTERFACE, Module.MM,
        "Create purchase order",
        ["Automated procurement", "Purchase order creation",
         "Vendor order management", "Integration with procurement systems"],
        ["EKKO", "EKPO", "LFA1"],
    ),
    _entry(
        "BAPI_MATERIAL_SAVEDATA", EntryKind.INTERFACE, Module.MM,
        "Create or change material master",
        ["Material master creation", "Material data updates",
         "Mass material maintenance", "MDM integration"],
        ["MARA", "MARC", "MARD"],
    ),
    _entry(
        "BAPI_ACC_DOCUMENT_POST", EntryKind.INTERFACE, Module.FI,
        "Post accounting document",
        ["Journal entry posting", "Financial document creation",
         "Integration with external systems", "Automated accounting"],
        ["BKPF", "BSEG", "SKA1"],
    ),
    _entry(
        "BAPI_CUSTOMER_GETDETAIL", EntryKind.INTERFACE, Module.FI,
        "Get customer master data",
        ["Customer data retrieval", "Credit limit checks",
         "Customer information display", "CRM integration"],
        ["KNA1", "KNVV", "KNVP"],
    ),
    _entry(
        "BAPI_COSTCENTER_CREATEMULTIPLE", EntryKind.INTERFACE, Module.CO,
        "Create multiple cost centers",
        ["Cost center creation", "Organizational structure setup",
         "Mass cost center maintenance"],
        ["CSKS", "CSKT"],
    ),
    _entry(
        "BAPI_EMPLOYEE_GETDATA", EntryKind.INTERFACE, Module.HR,
        "Read employee master data",
        ["Employee data retrieval", "Personnel information display",
         "Integration with payroll systems"],
        ["PA0001", "PA0002", "PA0006"],
    ),
    _entry(
        "BAPI_PRODORD_CREATE", EntryKind.INTERFACE, Module.PP,
        "Create production order",
        ["Production order creation", "Shop floor integration",
         "Automated production planning"],
        ["AUFK", "AFKO", "AFPO"],
    ),
)


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------

TRANSACTIONS = (
    _entry(
        "VA01", EntryKind.TRANSACTION, Module.SD, "Create Sales Order",
        ["Manual sales order entry", "Order creation with full validation",
         "Interactive order processing"],
        ["VBAK", "VBAP", "KONV"],
    ),
    _entry(
        "VA02", EntryKind.TRANSACTION, Module.SD, "Change Sales Order",
        ["Modify existing orders", "Update quantities and dates", "Change pricing"],
        ["VBAK", "VBAP"],
    ),
    _entry(
        "VA03", EntryKind.TRANSACTION, Module.SD, "Display Sales Order",
        ["View order details", "Order inquiry", "Status checking"],
        ["VBAK", "VBAP"],
    ),
    _entry(
        "ME21N", EntryKind.TRANSACTION, Module.MM, "Create Purchase Order",
        ["Manual PO creation", "Procurement processing", "Vendor order management"],
        ["EKKO", "EKPO"],
    ),
    _entry(
        "MM01", EntryKind.TRANSACTION, Module.MM, "Create Material Master",
        ["New material creation", "Product master data", "Material setup"],
        ["MARA", "MARC"],
    ),
    _entry(
        "FB01", EntryKind.TRANSACTION, Module.FI, "Post Document",
        ["Manual journal entries", "Financial document posting",
         "Accounting transactions"],
        ["BKPF", "BSEG"],
    ),
    _entry(
        "KS01", EntryKind.TRANSACTION, Module.CO, "Create Cost Center",
        ["Cost center creation", "Cost center master data maintenance"],
        ["CSKS", "CSKT"],
    ),
    _entry(
        "PA30", EntryKind.TRANSACTION, Module.HR, "Maintain HR Master Data",
        ["Employee master data maintenance", "Personnel record updates"],
        ["PA0001", "PA0002"],
    ),
    _entry(
        "CO01", EntryKind.TRANSACTION, Module.PP, "Create Production Order",
        ["Manual production order creation", "Production scheduling"],
        ["AUFK", "AFKO", "AFPO"],
    ),
)


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

PRICING_PROCEDURE = "PRICING_PROCEDURE"
AUTHORIZATION_OBJECT = "AUTHORIZATION_OBJECT"
NUMBER_RANGE = "NUMBER_RANGE"
BATCH_INPUT = "BATCH_INPUT"

PATTERNS = (
    _entry(
        PRICING_PROCEDURE, EntryKind.PATTERN, Module.SD,
        "Condition-based pricing with configurable calculation schema",
        ["Dynamic pricing", "Discount calculations", "Tax determination",
         "Surcharge processing"],
        ["KONV", "KONH", "T683"],
        name="SAP Pricing Procedure",
    ),
    _entry(
        AUTHORIZATION_OBJECT, EntryKind.PATTERN, Module.CROSS,
        "Role-based access control with authorization objects",
        ["Security checks", "Access control", "Field-level authorization",
         "Transaction authorization"],
        ["AGR_DEFINE", "USR02"],
        name="SAP Authorization Objects",
    ),
    _entry(
        NUMBER_RANGE, EntryKind.PATTERN, Module.CROSS,
        "Configurable number range management for document numbering",
        ["Document numbering", "Sequential ID generation",
         "Fiscal year dependent numbering", "External/internal numbering"],
        ["NRIV", "TNRO"],
        name="SAP Number Range Objects",
    ),
    _entry(
        BATCH_INPUT, EntryKind.PATTERN, Module.CROSS,
        "Standard batch processing for mass data updates",
        ["Mass data upload", "Batch processing", "Data migration",
         "Periodic updates"],
        name="Batch Input Processing",
    ),
)


DEFAULT_ENTRIES = INTERFACES + TRANSACTIONS + PATTERNS

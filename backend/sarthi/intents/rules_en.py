"""English rule table."""
from __future__ import annotations

from sarthi.intents.schemas import DispatchRule, RuleTable, TopicRule, keywords, when

RESPONSES = {
    "agrovoltaics": "Agrovoltaics (PV + farming) means using the same land for solar panels and crops. Shade-tolerant crops or fodder can be grown under the panels depending on panel height, spacing and water availability.",
    "how_much_loan": (
        "After subsidy, loans are often available at concessional rates (around 5% in many models).\n"
        "Typical EMIs for small systems can be in the range of about ₹2–3k per month, but this varies by bank and state.\n"
        "Loan approval often takes around 7–10 days."
    ),
    "payback": "Payback / ROI depends on system cost, subsidy and energy savings. For small solar pump systems, payback is often in the range of about 4–8 years, but it varies by site and tariffs.",
    "sun_hours": "Solar output depends on peak sun hours (PSH). Many locations see roughly 4–6 PSH per day; more peak sun hours mean more energy and longer pump runtime.",
    "how_much_cost": "In many cases you see around 60% subsidy, about 30% bank loan and roughly 10% farmer contribution.Installing a rooftop solar photovoltaic system under the KUSUM Scheme can cost a farmer around ₹42,000 to ₹49,000. Some states give about ₹1.5 crore per MW support for feeder solarisation under PM-KUSUM : - around ₹1.05 crore from central government and about ₹45 lakh from state government ( the final amount paid by the farmer depends on state and system size.)",
    "how_much_land": "For about 1 megawatt of solar capacity, roughly 4–5 acres ( Or 7.251 bigha / 145 Kattha) of land are typically required, though the exact figure can vary with design and site conditions. ",
    "daytime_hours": "One of the key objectives is to provide at least around 7 hours of reliable daytime power for irrigation pumps, so farmers can irrigate without frequent cuts.",
    "how_much_clarify": "What do you want to ask — cost, sunlight, land, payback, or pump hours?",
    "substation": (
        "PM-KUSUM requires the proposed site to be **within 5 km radius of the nearest substation**.\n\n"
        "✔ If your substation is **more than 5 km away**:\n"
        "  • Grid connection **cost increases**\n"
        "  • Vendor/agency will need **additional survey**\n"
        "  • **Alternative arrangements** may be possible\n\n"
        "✔ Solutions:\n"
        "  1. Check **nearest substation** using Google Maps\n"
        "  2. Confirm the distance with your **local DISCOM**\n"
        "  3. Get a **site survey** before applying"
    ),
    "small_farmer": (
        "KUSUM is not only for large farmers. Small farmers can apply as well.\n\n"
        "✔ If land area is small, farmers can apply as a group (FPO, cooperatives, panchayat groups) for a 1 MW project.\n"
        "✔ Small individual farmers can also apply for 1HP–10HP solar pumps, which require little land.\n\n"
        "So small farmers can benefit individually or through a community model."
    ),
    "documents": (
        "Documents usually required for PM-KUSUM include:\n\n"
        " Aadhaar card\n"
        "Bank passbook\n"
        "Land records (khasra/khatauni/registry)\n"
        "Electricity bill / connection details\n"
        "PAN card\n"
        "Mobile number / telephone number\n"
        "Email ID\n"
        "Digital Signature Certificate (DSC) — can be obtained via services like eMudhra\n\n"
        "Some states may ask for additional documents."
    ),
    "install_timeline": (
        "Typical time from installation to power generation:\n\n"
        "• Site survey and vendor allocation: about 7–15 days\n"
        "• Installation: about 15–25 days\n"
        "• Testing and approval: about 5–7 days\n\n"
        "So overall, it usually takes roughly 1–2 months from initial survey to actual generation, depending on state, vendor and site conditions."
    ),
    "benefits": "KUSUM helps you get cheaper power, save diesel and earn extra income by selling solar power. It can increase farmer income by cutting energy costs and adding solar revenue while also reducing pollution.",
    "eligibility": (
        "Generally individual farmers, groups, cooperatives, panchayats and FPOs can participate. "
        "Exact rules depend on your state guidelines. Farmers can apply online for solar water pumps "
        "from 1 HP to 10 HP, and both owners and leased-land farmers are usually eligible.\n\n"
        "For Digital Signature Certificate (DSC), you can visit: https://www.emudhra.com"
    ),
    "subsidy": "In many cases you see around 60% subsidy, about 30% bank loan and roughly 10% farmer contribution. Some states give about ₹1.5 crore per MW support for feeder solarisation under PM-KUSUM : - around ₹1.05 crore from central government and about ₹45 lakh from state government. Exact subsidy depends on your state’s policy and tender.”",
    "tender": (
        "Indicative tender / participation charges (these can vary by state and DISCOM):\n\n"
        "• Reference document charge: around ₹590\n"
        "• Bidding / participation charge: around ₹23,600\n"
        "• EMD (Earnest Money Deposit): around ₹1,00,000\n\n"
        "Always confirm the exact amounts from the latest official tender document before applying."
    ),
    "maintenance": "Solar panels can last for around 20–25 years and need very low maintenance. Mostly periodic cleaning and basic checking are enough.",
    "land": "For about 1 megawatt of solar capacity, roughly 4–5 acres of land are typically required, though the exact figure can vary with design and site conditions.",
    "feeder": "Under feeder-level solarisation, a common solar plant is installed near the agriculture feeder so that the whole feeder gets daytime solar power. In the individual pump model, a separate solar system is installed on each farmer's pump so they can run irrigation directly from their own solar power.",
    "agency": "PM-KUSUM is implemented by the Ministry of New and Renewable Energy (MNRE) together with state nodal agencies and electricity distribution companies (DISCOMs).",
    "how_it_works": "Component-C of PM-KUSUM primarily aims to power grid-connected agricultural pumps with solar energy .In this scheme, grid-connected pumps are solarised so that the farmer generates power on-site to run the pump. This reduces dependence on the grid and electricity bills while increasing clean solar generation nd also earn income by selling surplus power to the grid.",
    "farming_impact": (
        "Solar does not mean you must stop farming – with proper design both can work together:\n\n"
        " Positives:\n"
        "• Panel shade can protect some crops from extreme heat and hot winds.\n"
        "• Soil moisture can stay longer, so in some cases irrigation frequency reduces slightly.\n"
        "• Shade-tolerant crops (fodder, some vegetables, some pulses) can do well under panels.\n\n"
        " Points to watch:\n"
        "• Crops that need full, strong sun may give lower yield directly under panels.\n"
        "• You must keep enough height and spacing for tractor and machinery to pass.\n"
        "• Prefer drip irrigation or controlled water flow, so electrical parts do not get wet.\n\n"
        "With the right crop mix and layout, farmers can benefit from both solar power and crops on the same land."
    ),
    "dos_and_donts": (
        " DOs:\n"
        "• Keep enough pathway between panel rows for people and machinery.\n"
        "• Do regular cleaning and basic visual inspection of panels and cables.\n"
        "• Use a qualified electrician for wiring and connections.\n"
        "• Prefer low/medium height crops under panels that can handle partial shade.\n"
        "• After strong storms, hail or heavy rain, inspect the structure and foundations.\n\n"
        " DON'Ts:\n"
        "• Don't plant very tall trees or crops right next to panels – this increases shading and dirt.\n"
        "• Don't leave loose or exposed wires near where people or animals move.\n"
        "• Don't put extra heavy loads on the solar structure.\n"
        "• Don't open electrical boxes yourself without proper tools and safety.\n\n"
        "Following these simple tips helps keep your system safe, long-lasting and farmer-friendly."
    ),
    "loan": "After subsidy, loans are often available at concessional rates (around 5% in many models). Typical EMIs can be in the range of ₹2–3k per month for small systems, with approval often within about 7–10 days (varies by bank and state).",
}

FALLBACK = "You can ask about benefits, eligibility, required documents, subsidy, maintenance, land needed for 1 MW, feeder-level vs individual pump solarisation, agrovoltaics, sun hours, payback, implementation agencies, or how the scheme works in simple steps."

HOW_MUCH = keywords(
    "how_much",
    "how much", "how many", "kitna", "kitni", "kitne", "how long", "what is the minimum", "minimum land",
    "land required", "land needed",
)
AGRO_HOW_MUCH = keywords(
    "agro_how_much",
    "agrovoltaic", "agrovoltiac", "agrivoltaic", "agro voltaic", "agro voltaics", "agro", "agro solar",
    "agro pv", "agri pv", "solar farming", "crop under panel", "shade crop",
)

EMI_HINT = keywords("emi_hint", "emi", "emi amount", "emi how much", "loan", "bank loan")
ROI_NEXT = keywords("roi_next", "years", "year", "payback", "return", "roi", "days", "day", "months", "month", "weeks", "week")
SUN_NEXT = keywords("sun_next", "sun", "sunlight", "sun hours", "psh", "insolation")
COST_NEXT = keywords("cost_next", "money", "cost", "pay", "amount", "price")
LAND_NEXT = keywords(
    "land_next",
    "land", "acre", "how much land", "land requirement", "minimum land", "land required", "land needed",
    "minimum area", "area required", "min land", "min area",
)
HOUR_NEXT = keywords("hour_next", "hours", "power")

SUBSTATION = keywords(
    "substation",
    "5 km", "5km", "5 kilometer", "five km", "sub station", "sub-station", "substation", "nearest sub",
    "5km radius", "within 5km", "distance from substation",
)
SMALL_FARMER = keywords(
    "small_farmer",
    "small farmer", "small farmers", "small land", "little land", "smallholder", "small holder",
    "group apply", "community apply", "can small farmers apply", "is it not for small farmers",
    "fpo apply", "farmer group",
)
SMALL = keywords("small", "small")
FARMER = keywords("farmer", "farmer")

DOCUMENTS = keywords(
    "documents",
    "document", "documents", "paper", "papers", "doc", "pan card", "digital signature", "dsc", "e sign",
    "email", "telephone", "mobile number", "emudhra", "emudhra.com",
)
AGRO_TEXT = keywords(
    "agro_text",
    "agrovoltaic", "agrovoltiac", "agrivoltaic", "agro voltaic", "agro voltaics", "agri pv", "agro pv",
    "agro solar", "solar farming", "crop under panel", "under panel crop", "shade crop",
)
INTENSITY = keywords(
    "intensity",
    "sun hours", "sun hour", "peak sun", "peak-sun", "psh", "solar radiation", "insolation",
    "how much sun", "how many sun hours",
)
ROI_TEXT = keywords(
    "roi_text",
    "payback", "payback period", "roi", "return on investment", "how long to recover",
    "how many years to recover", "how many days", "days to recover",
)
INSTALL_TIME = keywords(
    "install_time",
    "time from installation", "time from install", "installation to generation",
    "from installation to generation", "till generation", "when will generation start", "generation",
    "time to start generation",
)
BENEFIT = keywords("benefit", "benefit", "benefits", "profit", "advantage")
ELIGIBILITY = keywords("eligibility", "eligible", "eligibility", "who can apply", "who is eligible", "who all can apply")
SUBSIDY = keywords("subsidy", "subsidy", "grant", "how much pay", "farmer share", "cost", "payment")
TENDER = keywords(
    "tender",
    "tender", "tender charges", "tender charge", "tender fee", "tender fees", "document fee",
    "document charge", "reference document charge", "bidding charge", "bid charge", "bidder charge",
    "bidding fee", "emd", "earnest money", "earnest money deposit", "emd amount",
)
MAINTENANCE = keywords("maintenance", "maintenance", "cleaning", "lifetime of solar panel", "service requirements")
LAND = keywords(
    "land",
    "how much land", "land requirement", "1 mw", "1mw", "1 megawatt", "acre", "acres", "land required",
    "land needed", "minimum land", "minimum area", "area required", "min land", "min area",
)
FEEDER = keywords(
    "feeder",
    "feeder level", "feeder solarisation", "feeder solarization", "solarisation of feeder",
    "individual pump", "pump solarisation", "pump solarization",
)
HOURS = keywords("hours", "hours", "7 hours", "daytime power", "how many hours power")
AGENCY = keywords("agency", "who implements", "implementation", "mnre", "which agency")
WORKING = keywords(
    "working",
    "how it works", "working", "work how", "scheme work", "component c", "kusum c", "pm kusum c",
    "pm-kusum c", "component-c", "pm kusum yojna", "PM-KUSUM scheme", "PM KUSUM", "PM KUSUM scheme",
)
FARMING_EFFECT = keywords(
    "farming_effect",
    "farming effect", "affect farming", "impact on farming", "impact on crops", "crop impact",
    "will crops be affected", "will crop be affected", "effect on crop", "farming under panels",
    "farming under solar", "effect on yield", "yield effect", "does it reduce yield", "will yield reduce",
)
DOS_DONTS = keywords(
    "dos_donts",
    "dos and donts", "dos and don'ts", "do and dont", "do and don't", "do's and don'ts",
    "what should i be careful", "what should we be careful", "what to be careful", "precautions",
    "precaution", "safety tips", "safety guideline", "safety guidelines",
)
LOAN = keywords(
    "loan",
    "bank loan get", "emi how much", "emi", "emi amount", "bank give money", "bank loan", "loan when",
    "bank refuse",
)


def _topic(priority: int, topic: str, *matches) -> TopicRule:
    return TopicRule(priority=priority, topic=topic, when=tuple(matches), response=RESPONSES[topic])


TABLE = RuleTable(
    locale="en",
    fallback=FALLBACK,
    rules=(
        _topic(10, "agrovoltaics", when(HOW_MUCH, AGRO_HOW_MUCH)),
        DispatchRule(
            priority=20,
            topic="how_much",
            when=(when(HOW_MUCH),),
            branches=(
                _topic(1, "how_much_loan", when(EMI_HINT)),
                _topic(2, "payback", when(ROI_NEXT)),
                _topic(3, "sun_hours", when(SUN_NEXT)),
                _topic(4, "how_much_cost", when(COST_NEXT)),
                _topic(5, "how_much_land", when(LAND_NEXT)),
                _topic(6, "daytime_hours", when(HOUR_NEXT)),
            ),
            fallback=RESPONSES["how_much_clarify"],
        ),
        _topic(30, "substation", when(SUBSTATION)),
        _topic(40, "small_farmer", when(SMALL_FARMER), when(SMALL, FARMER)),
        _topic(50, "documents", when(DOCUMENTS)),
        _topic(60, "agrovoltaics", when(AGRO_TEXT)),
        _topic(70, "sun_hours", when(INTENSITY)),
        _topic(80, "payback", when(ROI_TEXT)),
        _topic(90, "install_timeline", when(INSTALL_TIME)),
        _topic(100, "benefits", when(BENEFIT)),
        _topic(110, "eligibility", when(ELIGIBILITY)),
        _topic(120, "subsidy", when(SUBSIDY)),
        _topic(130, "tender", when(TENDER)),
        _topic(140, "maintenance", when(MAINTENANCE)),
        _topic(150, "land", when(LAND)),
        _topic(160, "feeder", when(FEEDER)),
        _topic(170, "daytime_hours", when(HOURS)),
        _topic(180, "agency", when(AGENCY)),
        _topic(190, "how_it_works", when(WORKING)),
        _topic(200, "farming_impact", when(FARMING_EFFECT)),
        _topic(210, "dos_and_donts", when(DOS_DONTS)),
        _topic(220, "loan", when(LOAN)),
    ),
)

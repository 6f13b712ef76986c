RAW_DATA_PATH = "data/pppub.csv"
CLEAN_DATA_PATH = "data/cleaned.csv"
OUT = "outputs/classification"
MODEL_DIR = "outputs/classification/models"

SEED = 1234

# Sampling is stratified on this column, in this order.
GROUP_COL = "group"
GROUP_ORDER = ["aid", "poor", "no"]
SAMPLE_COL = "sample"
TRAIN_FRACTION = 0.5
VALIDATION_FRACTION = 0.6  # of the rows left after train

# CPS ASEC person file -> short names
RAW_COLUMNS = {
    "A_AGE": "age",
    "A_SEX": "sex",
    "A_MARITL": "marital",
    "PRDTRACE": "race",
    "A_HGA": "educ",
    "SPM_TENMORTSTATUS": "mortgage",
    "GESTFIPS": "state",
    "PTOTVAL": "income",
    "PEARNVAL": "earnings",
    "SPM_TOTVAL": "famincome",
    "SPM_MEDXPNS": "medexp",
    "SPM_CHILDCAREXPNS": "childcare",
    "SPM_NUMPER": "famsize",
    "SPM_NUMKIDS": "kids",
    "OFFPOV": "offpov",
    "SPM_POOR": "spmpov",
    "SPM_SNAPSUB": "snap",
    "SPM_CAPHOUSESUB": "housing",
    "SPM_SCHLUNCH": "lunch",
    "SPM_WICVAL": "wic",
}

POVERTY_FLAGS = {
    "offpov": {1: True, 2: False},
    "spmpov": {1: True, 0: False},
}
SUBSIDY_FIELDS = ["snap", "housing", "lunch", "wic"]
LABEL_SOURCE_FIELDS = list(POVERTY_FLAGS) + SUBSIDY_FIELDS

MIN_AGE = 26
N_STD = 3
OUTLIER_FIELDS = ["income", "earnings", "famincome", "medexp", "childcare"]

CONTINUOUS_FIELDS = ["age", "income", "earnings", "famincome", "medexp",
                     "childcare", "famsize", "kids"]

STATE_FIPS = {
    1: "AL", 2: "AK", 4: "AZ", 5: "AR", 6: "CA", 8: "CO", 9: "CT", 10: "DE",
    11: "DC", 12: "FL", 13: "GA", 15: "HI", 16: "ID", 17: "IL", 18: "IN",
    19: "IA", 20: "KS", 21: "KY", 22: "LA", 23: "ME", 24: "MD", 25: "MA",
    26: "MI", 27: "MN", 28: "MS", 29: "MO", 30: "MT", 31: "NE", 32: "NV",
    33: "NH", 34: "NJ", 35: "NM", 36: "NY", 37: "NC", 38: "ND", 39: "OH",
    40: "OK", 41: "OR", 42: "PA", 44: "RI", 45: "SC", 46: "SD", 47: "TN",
    48: "TX", 49: "UT", 50: "VT", 51: "VA", 53: "WA", 54: "WV", 55: "WI",
    56: "WY",
}

# field -> (code -> level, ordered levels)
CATEGORICAL_LEVELS = {
    "sex": (
        {1: "Male", 2: "Female"},
        ["Male", "Female"],
    ),
    "marital": (
        {1: "Married", 2: "Married", 3: "Married", 4: "Widowed",
         5: "Divorced", 6: "Separated", 7: "NeverMarried"},
        ["Married", "Widowed", "Divorced", "Separated", "NeverMarried"],
    ),
    "race": (
        {1: "White", 2: "Black", 3: "AmIndian", 4: "Asian", 5: "PacIslander",
         **{code: "Multiracial" for code in range(6, 27)}},
        ["White", "Black", "AmIndian", "Asian", "PacIslander", "Multiracial"],
    ),
    "educ": (
        {**{code: "NoDiploma" for code in range(31, 39)},
         39: "HighSchool", 40: "SomeCollege", 41: "SomeCollege",
         42: "SomeCollege", 43: "Bachelor", 44: "Graduate", 45: "Graduate",
         46: "Graduate"},
        ["NoDiploma", "HighSchool", "SomeCollege", "Bachelor", "Graduate"],
    ),
    "mortgage": (
        {1: "OwnerMortgage", 2: "OwnerNoMortgage", 3: "Renter"},
        ["OwnerMortgage", "OwnerNoMortgage", "Renter"],
    ),
    "state": (
        STATE_FIPS,
        sorted(STATE_FIPS.values()),
    ),
}

# Coefficients of every indicator read relative to these levels.
REFERENCE_LEVELS = {
    "sex": "Male",
    "marital": "Married",
    "race": "White",
    "educ": "HighSchool",
    "mortgage": "Renter",
    "state": "CA",
}

MAXIT = 250
PCA_VARIANCE = 0.85
QDA_REG_PARAM = 0.01
OUTCOME_REFERENCE = "no"
POSITIVE_LABEL = "aid"

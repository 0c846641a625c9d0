"""
Default parameters for ATP screening
"""

# ==================== Limits ====================
AEROBIC_ATP_LIMIT = 150  # mmol/gDW/h
ANAEROBIC_ATP_LIMIT = 100

# ==================== Model setup ====================
ATP_DEMAND_ID = 'DM_atp_c_'
OXYGEN_EXCHANGE_ID = 'EX_o2(e)'
AEROBIC_OXYGEN_UPTAKE = -10.0
MODEL_EXTENSIONS = ('.mat', '.xml', '.sbml', '.json')

# ==================== Output ====================
TEST_RESULTS_FOLDER = './TestResults'
RECON_VERSION = 'Reconstructions'
N_WORKERS = 0  # 0 = serial
TOO_HIGH_ATP_FILENAME = 'tooHighATP.csv'

# Plot style
DPI = 300
FIGURE_SIZE = (8, 6)
FONT_SIZE = 12
COLOR_AEROBIC = '#4C72B0'
COLOR_ANAEROBIC = '#DD8452'

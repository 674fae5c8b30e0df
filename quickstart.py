from vcdlog import VLManager, VLConfig, HeaderConfig, TimescaleConfig
import logging
import sys

logging.basicConfig(
    filename='debug.log',
    filemode='w',
    level=logging.DEBUG,
    format='%(asctime)s:%(levelname)s:%(message)s'
)

# Create a logger
logger = logging.getLogger(__name__)

LOG = """
#0 clk 0 1
#5 clk 1 1
#5 counter 0001 4
#10 clk 0 1
#15 clk 1 1
#15 counter 0010 4
#15 vdd 1.8 f
not a value change, dropped with a warning
"""

# Configure a 1 ns timescale with a 'top' scope
config = VLConfig(header=HeaderConfig(timescale=TimescaleConfig(unit="NS"), scope="top"))

# Convert the log and print the VCD
manager = VLManager(config)
manager.convert(LOG.splitlines(), sys.stdout)
print("Dropped lines:", sum(manager.dropped.values()), file=sys.stderr)

from apmagent import Agent, AgentConfig, BrowserMonitoringConfig, InstrumentationAPI
from apmagent.browser import deobfuscate

config = AgentConfig(
    license_key="0123456789ABC",
    application_id="42",
    browser_monitoring=BrowserMonitoringConfig(browser_key="abc123", debug=True),
)


def main():
    agent = Agent(config)
    api = InstrumentationAPI(agent)

    # Outside a transaction only a comment comes back
    print(api.get_browser_timing_header())

    with agent.start_transaction(url="/checkout", verb="POST", queue_time=5):
        api.set_transaction_name("Checkout")
        header = api.get_browser_timing_header()
        print(header)

    name = header.split('"transactionName": "')[1].split('"')[0]
    print("decoded name:", deobfuscate(name, config.license_key))
    print("recorded:", agent.transactions)


if __name__ == "__main__":
    main()
